from __future__ import annotations

"""Integrated GameRNG module.

This module provides the deterministic random number generator used across
the project.  Every random decision made during dungeon generation (room
sizes and positions, corridor orientation, monster counts, placement and
species) is drawn from a single :class:`GameRNG` owned by the session, so a
fixed seed reproduces the same dungeon.
"""

import random
from typing import Any, List, Optional, Sequence, Union

import numpy as np


class GameRNG:
    def __init__(self, seed: Optional[int] = None) -> None:
        self.initial_seed = seed if seed is not None else random.randint(0, 2**32 - 1)
        self.rng = np.random.default_rng(self.initial_seed)

    # ------------------------------------------------------------------
    # basic random helpers
    # ------------------------------------------------------------------
    def get_int(self, a: int, b: int) -> int:
        """Uniform integer in the inclusive range ``[a, b]``."""
        if a > b:
            raise ValueError("a <= b")
        return int(self.rng.integers(a, b + 1))

    def get_float(self, a: float = 0.0, b: float = 1.0) -> float:
        if a > b:
            raise ValueError("a <= b")
        val = float(self.rng.random())
        return a + (b - a) * val

    def choice(self, seq: Sequence[Any]) -> Any:
        """Return a random element from *seq*."""
        if not seq:
            raise ValueError("seq empty")
        return seq[self.get_int(0, len(seq) - 1)]

    # ------------------------------------------------------------------
    # weighted helpers
    # ------------------------------------------------------------------
    def weighted_choice(self, items: Sequence[Any], weights: Sequence[float]) -> Any:
        if len(items) != len(weights):
            raise ValueError("items/weights length mismatch")
        if not items:
            raise ValueError("items empty")
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("weight sum must be positive")

        cdf = np.cumsum(np.asarray(weights, dtype=float))
        cdf[-1] = total
        r = self.get_float(0.0, total)
        idx = int(np.searchsorted(cdf, r, side="right"))
        return items[min(idx, len(items) - 1)]

    def coin_flip(
        self, num_flips: int = 1, heads_probability: float = 0.5
    ) -> Union[str, List[str]]:
        if not 0.0 <= heads_probability <= 1.0:
            raise ValueError("probability out of range")
        results = [
            "heads" if self.get_float() < heads_probability else "tails"
            for _ in range(num_flips)
        ]
        return results[0] if num_flips == 1 else results


__all__ = ["GameRNG"]
