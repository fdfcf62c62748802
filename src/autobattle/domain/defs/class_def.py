"""Class attribute table structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from autobattle.domain.classes import HeroClass
from autobattle.domain.entities.stats import CombatStats


@dataclass(frozen=True, slots=True)
class ClassDef:
    """Display name and per-level base stats for one hero class."""

    id: HeroClass
    name: str
    levels: Dict[int, CombatStats]

    def stats_at(self, level: int) -> CombatStats:
        try:
            return self.levels[level]
        except KeyError as exc:
            raise KeyError(f"Class '{self.id.value}' has no stats for level {level}.") from exc
