# main.py
import sys
from pathlib import Path

import structlog
import yaml

from engine.console_renderer import ConsoleRenderer, StdinInput
from engine.input_handler import DEFAULT_KEYBINDINGS, InputHandler
from engine.main_loop import MainLoop
from game.game_state import GameState
from utils.config_loader import GameConfig, load_toml_config, load_yaml_config
from utils.logging_utils import setup_logging

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"

CONFIG_FILE = CONFIG_DIR / "config.yaml"
KEYBINDINGS_FILE = CONFIG_DIR / "keybindings.toml"
# --- End Paths ---

log = structlog.get_logger()


def main() -> None:
    """Main entry point for the application."""
    try:
        # --- Load Configurations ---
        config = load_yaml_config(CONFIG_FILE, "Main")
        game_config = GameConfig.from_dict(config)
        setup_logging(game_config.log_level)
        log.info("Application starting...", config_dir=str(CONFIG_DIR))

        keybindings_config = load_toml_config(KEYBINDINGS_FILE, "Keybindings")
        if not keybindings_config.get("bindings"):
            log.error("No keybindings loaded, using defaults")
            keybindings_config = DEFAULT_KEYBINDINGS
        log.info(
            "Configurations loaded",
            keybinding_sets=len(keybindings_config.get("bindings", {})),
            monster_templates=len(game_config.monster_templates),
        )

        # --- Game Initialization ---
        log.info("Initializing game state...")
        game_state = GameState.new_game(game_config)

        renderer = ConsoleRenderer()
        input_source = StdinInput(InputHandler(keybindings_config))
        main_loop = MainLoop(game_state, renderer, input_source)

    # --- Exception Handling ---
    except FileNotFoundError as e:
        log.critical("Required file not found during init", error=str(e), exc_info=True)
        sys.exit(f"Initialization failed: File not found - {e}")
    except yaml.YAMLError as e:
        log.critical("Malformed configuration", error=str(e), exc_info=True)
        sys.exit(f"Configuration failed: {e}")
    except KeyError as e:
        log.critical("Missing required key, possibly in config", key=str(e), exc_info=True)
        sys.exit(f"Configuration failed: Missing key {e}")
    except TypeError as e:
        log.critical("Fatal Type Error during init", error=str(e), exc_info=True)
        sys.exit(f"Initialization failed (TypeError): {e}")
    except ValueError as e:
        log.critical("Invalid configuration value", error=str(e), exc_info=True)
        sys.exit(f"Initialization failed: {e}")
    # --- End Exception Handling ---

    try:
        main_loop.run()
    except Exception as e:
        log.critical("Fatal error during game loop", error=str(e), exc_info=True)
        sys.exit(f"Game loop failed: {e}")
    log.info("Application exiting")


if __name__ == "__main__":
    main()
