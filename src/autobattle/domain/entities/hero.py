"""Hero template model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from autobattle.domain.classes import Category, HeroClass, category_of

from .stats import CombatStats


@dataclass(slots=True)
class Hero:
    """A recruited hero; the template battle units are created from."""

    id: str
    name: str
    hero_class: HeroClass
    level: int
    stats: CombatStats
    skill_upgrades: Dict[str, int] = field(default_factory=dict)
    available_points: int = 0

    @property
    def category(self) -> Category:
        return category_of(self.hero_class)

    def upgrade_points(self, category: str) -> int:
        return self.skill_upgrades.get(category, 0)
