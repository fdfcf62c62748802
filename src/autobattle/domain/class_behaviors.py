"""Per-class combat behaviour table.

Numbers live in the skill catalog; this table only says *what* each number
means for a class. The damage calculator and the action resolver look a
class up here instead of branching on class names.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from autobattle.core.types import EffectType
from autobattle.domain.battle_models import PERMANENT_DURATION
from autobattle.domain.classes import HeroClass

PassiveKind = Literal[
    "attack_bonus",
    "stun_chance",
    "bonus_attack",
    "crit_bonus",
    "extra_targets",
    "damage_growth",
]
PrecisionKind = Literal["ignore_defense", "crit_bonus", "back_row_chance"]
AgilityKind = Literal["counter", "block"]
UltimateTargeting = Literal["default", "all", "front_and_back"]
UltimateOnHit = Literal["heal", "def_down", "charge"]


@dataclass(frozen=True, slots=True)
class DurationUpgradeEffect:
    """Effect a basic hit applies once ``duration`` points are invested."""

    effect_type: EffectType
    duration: int
    scales_with_coefficient: bool


@dataclass(frozen=True, slots=True)
class ClassBehavior:
    passive: PassiveKind
    ultimate_targeting: UltimateTargeting = "default"
    ultimate_targets: int = 1
    ultimate_on_hit: UltimateOnHit | None = None
    precision: PrecisionKind | None = None
    agility: AgilityKind | None = None
    duration_effect: DurationUpgradeEffect | None = None


CLASS_BEHAVIORS: Dict[HeroClass, ClassBehavior] = {
    HeroClass.SWORDSMAN: ClassBehavior(
        passive="attack_bonus",
        ultimate_on_hit="heal",
        precision="ignore_defense",
        agility="counter",
    ),
    HeroClass.AXEMAN: ClassBehavior(
        # The stun passive is catalogued but no skill applies it yet.
        passive="stun_chance",
        ultimate_targets=2,
        ultimate_on_hit="def_down",
        precision="crit_bonus",
        agility="block",
    ),
    HeroClass.SPEARMAN: ClassBehavior(
        passive="bonus_attack",
        ultimate_targeting="front_and_back",
        precision="back_row_chance",
        agility="counter",
    ),
    HeroClass.FIRE_MAGE: ClassBehavior(
        passive="crit_bonus",
        duration_effect=DurationUpgradeEffect("burn", duration=2, scales_with_coefficient=True),
    ),
    HeroClass.WIND_MAGE: ClassBehavior(
        passive="extra_targets",
        ultimate_targeting="all",
        duration_effect=DurationUpgradeEffect("vulnerability", duration=2, scales_with_coefficient=False),
    ),
    HeroClass.LIGHTNING_MAGE: ClassBehavior(
        passive="damage_growth",
        ultimate_on_hit="charge",
        duration_effect=DurationUpgradeEffect(
            "charge", duration=PERMANENT_DURATION, scales_with_coefficient=True
        ),
    ),
}


def behavior_of(hero_class: HeroClass) -> ClassBehavior:
    try:
        return CLASS_BEHAVIORS[hero_class]
    except KeyError as exc:
        raise KeyError(f"No combat behaviour registered for class '{hero_class}'.") from exc
