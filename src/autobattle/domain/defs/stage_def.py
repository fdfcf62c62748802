"""Stage definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from autobattle.domain.classes import HeroClass


@dataclass(frozen=True, slots=True)
class StageDef:
    """A preconfigured enemy encounter."""

    id: int
    enemy_level: int
    weakening_factor: float
    front_pool: Tuple[HeroClass, ...]
    back_pool: Tuple[HeroClass, ...]
