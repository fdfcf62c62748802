"""Skill catalog structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from autobattle.domain.classes import (
    PASSIVE_UNLOCK_LEVEL,
    PASSIVE_UPGRADE_LEVEL,
    ULTIMATE_UPGRADE_LEVEL,
    HeroClass,
)


@dataclass(frozen=True, slots=True)
class BasicSkillDef:
    """Cooldown-free skill used whenever the ultimate is not ready.

    ``extra_chance``, ``ignore_defense`` and ``back_row_chance`` are ratios in
    0.0 - 1.0. ``upgrade_values`` maps an upgrade category to the effect of a
    single invested point in that category.
    """

    name: str
    description: str
    coefficient: float
    ignore_defense: float = 0.0
    extra_chance: float = 0.0
    back_row_chance: float = 0.0
    upgrade_values: Dict[str, float] = field(default_factory=dict)

    def upgrade_value(self, category: str) -> float:
        return self.upgrade_values.get(category, 0.0)


@dataclass(frozen=True, slots=True)
class UltimateSkillDef:
    """Cooldown-gated skill unlocked at level 4 and enhanced at level 8."""

    name: str
    description: str
    cooldown: int
    initial_cooldown: int
    base_coefficient: float
    upgraded_coefficient: float
    special_value: float | None = None
    upgraded_special_value: float | None = None

    def coefficient_for(self, level: int) -> float:
        return self.upgraded_coefficient if level >= ULTIMATE_UPGRADE_LEVEL else self.base_coefficient

    def special_for(self, level: int) -> float:
        if level >= ULTIMATE_UPGRADE_LEVEL and self.upgraded_special_value is not None:
            return self.upgraded_special_value
        return self.special_value or 0.0


@dataclass(frozen=True, slots=True)
class PassiveSkillDef:
    """Always-on modifier, active from level 3 and upgraded at level 6."""

    name: str
    description: str
    value: float
    upgraded_value: float
    secondary_value: float | None = None
    upgraded_secondary_value: float | None = None

    def value_for(self, level: int) -> float | None:
        """Return the active tier value, or None while the passive is locked."""
        if level < PASSIVE_UNLOCK_LEVEL:
            return None
        return self.upgraded_value if level >= PASSIVE_UPGRADE_LEVEL else self.value


@dataclass(frozen=True, slots=True)
class SkillSetDef:
    """The three skills every hero class carries."""

    hero_class: HeroClass
    basic: BasicSkillDef
    ultimate: UltimateSkillDef
    passive: PassiveSkillDef
