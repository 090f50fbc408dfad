import pytest
from structlog.testing import capture_logs

import main


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda level: None)


def test_loop_failure_is_logged_before_exit(monkeypatch):
    def broken_run(self):
        raise RuntimeError("render target lost")

    monkeypatch.setattr(main.MainLoop, "run", broken_run)
    with capture_logs() as logs, pytest.raises(SystemExit) as excinfo:
        main.main()
    assert "render target lost" in str(excinfo.value)
    critical = [e for e in logs if e["log_level"] == "critical"]
    assert critical[-1]["event"] == "Fatal error during game loop"


def test_missing_config_exits(monkeypatch, tmp_path):
    monkeypatch.setattr(main, "CONFIG_FILE", tmp_path / "missing.yaml")
    with capture_logs() as logs, pytest.raises(SystemExit):
        main.main()
    assert any(e["log_level"] == "critical" for e in logs)


def test_clean_exit_returns(monkeypatch):
    monkeypatch.setattr(main.MainLoop, "run", lambda self: None)
    with capture_logs() as logs:
        main.main()
    assert logs[-1]["event"] == "Application exiting"
