"""Utilities for creating instance identifiers."""
from __future__ import annotations

from typing import Collection

from autobattle.core.rng import RNG

_ID_LOW = 100000
_ID_HIGH = 999999


def make_instance_id(prefix: str, rng: RNG, *, taken: Collection[str] = ()) -> str:
    """Draw ``{prefix}_{number}`` ids from ``rng`` until one is not in ``taken``."""
    if len(taken) > _ID_HIGH - _ID_LOW:
        raise ValueError(f"No free '{prefix}' ids left.")
    while True:
        candidate = f"{prefix}_{rng.randint(_ID_LOW, _ID_HIGH)}"
        if candidate not in taken:
            return candidate
