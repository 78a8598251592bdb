from __future__ import annotations

"""Randomness helpers for draw sampling and seeding."""

import os
import random
from typing import Optional


def seed_from_env() -> Optional[int]:
    """Integer seed from the SEED env var, if set and valid."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        return int(seed)
    except ValueError:
        return None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Independent RNG for draws; falls back to SEED from the environment."""
    if seed is None:
        seed = seed_from_env()
    return random.Random(seed)
