"""Effective numbers for a unit's skills once upgrades and passives apply."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from autobattle.domain.class_behaviors import behavior_of
from autobattle.domain.classes import POWER_CATEGORY, RANGE_CATEGORY, HeroClass, category_of
from autobattle.domain.defs import SkillSetDef


@dataclass(frozen=True, slots=True)
class BasicSkillProfile:
    """Resolved basic skill numbers.

    ``target_count`` may be fractional; the fraction is the chance of one
    more target. ``crit_bonus`` is informational here, the damage calculator
    applies it on its own.
    """

    coefficient: float
    target_count: float
    ignore_def_val: float
    ignore_def_ratio: float
    crit_bonus: float
    back_row_chance: float


def derive_basic_profile(
    hero_class: HeroClass,
    level: int,
    skill_upgrades: Mapping[str, int],
    skills: SkillSetDef,
) -> BasicSkillProfile:
    basic = skills.basic
    behavior = behavior_of(hero_class)
    category = category_of(hero_class)

    power_key = POWER_CATEGORY[category]
    coefficient = basic.coefficient * (1 + skill_upgrades.get(power_key, 0) * basic.upgrade_value(power_key))

    range_key = RANGE_CATEGORY[category]
    target_count = 1 + skill_upgrades.get(range_key, 0) * basic.upgrade_value(range_key)
    if behavior.passive == "extra_targets":
        extra = skills.passive.value_for(level)
        if extra is not None:
            target_count += extra

    precision = skill_upgrades.get("precision", 0) * basic.upgrade_value("precision")
    return BasicSkillProfile(
        coefficient=coefficient,
        target_count=target_count,
        ignore_def_val=precision if behavior.precision == "ignore_defense" else 0.0,
        ignore_def_ratio=basic.ignore_defense,
        crit_bonus=precision if behavior.precision == "crit_bonus" else 0.0,
        back_row_chance=basic.back_row_chance
        + (precision if behavior.precision == "back_row_chance" else 0.0),
    )


def counter_chance(hero_class: HeroClass, skill_upgrades: Mapping[str, int], skills: SkillSetDef) -> float:
    """Percent chance to counter a basic hit; 0 for classes that do not counter."""
    if behavior_of(hero_class).agility != "counter":
        return 0.0
    return skill_upgrades.get("agility", 0) * skills.basic.upgrade_value("agility")


def bonus_attack_chance(hero_class: HeroClass, level: int, skills: SkillSetDef) -> float:
    """Percent chance a non-chained basic skill is followed by one more."""
    if skills.basic.extra_chance:
        return skills.basic.extra_chance * 100
    if behavior_of(hero_class).passive == "bonus_attack":
        return skills.passive.value_for(level) or 0.0
    return 0.0
