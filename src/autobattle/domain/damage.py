"""Damage calculation.

``compute_damage`` is the single formula every hit and every DOT tick goes
through. It reads both units but never modifies them; the caller applies the
returned damage. The order of operations is load-bearing for balance:

1. attack stat by attacker category, then passive and accumulated bonuses;
2. defense stat by attacker category, then def_down, flat ignore, ratio
   ignore, and the -30 floor;
3. defense multiplier ``100 / (100 + max(-99, defense))``;
4. crit roll, vulnerability, damage factor, rounding half up;
5. block roll (halves the rounded damage), and a floor of 1.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from autobattle.core.rng import RNG
from autobattle.core.types import SkillType
from autobattle.domain.battle_models import BattleUnit
from autobattle.domain.class_behaviors import behavior_of
from autobattle.domain.classes import Category
from autobattle.domain.effects import find_effect

DEFENSE_FLOOR = -30
DEFENSE_MULTIPLIER_FLOOR = -99
BLOCK_MULTIPLIER = 0.5
MIN_DAMAGE = 1


@dataclass(frozen=True, slots=True)
class DamageOptions:
    """Situational modifiers supplied by the skill being resolved."""

    ignore_def_val: float = 0.0
    ignore_def_ratio: float = 0.0
    is_normal_skill: bool = False
    skill_type: SkillType = "normal"


@dataclass(frozen=True, slots=True)
class DamageResult:
    damage: int
    is_crit: bool
    is_block: bool


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def defense_multiplier(defense: float) -> float:
    clamped = max(DEFENSE_FLOOR, defense)
    return 100 / (100 + max(DEFENSE_MULTIPLIER_FLOOR, clamped))


def effective_attack(attacker: BattleUnit) -> float:
    attack = attacker.stats.p_atk if attacker.category is Category.WARRIOR else attacker.stats.m_atk
    if behavior_of(attacker.hero_class).passive == "attack_bonus":
        bonus = attacker.skills.passive.value_for(attacker.level)
        if bonus is not None:
            attack *= 1 + bonus / 100
    return attack * (1 + attacker.accumulated_dmg_bonus / 100)


def effective_defense(attacker: BattleUnit, defender: BattleUnit, options: DamageOptions) -> float:
    if attacker.category is Category.WARRIOR:
        defense: float = defender.stats.p_def
    else:
        defense = defender.stats.m_def
    def_down = find_effect(defender.effects, "def_down")
    if def_down is not None:
        defense *= 1 - def_down.value / 100
    if options.ignore_def_val:
        defense -= options.ignore_def_val
    if options.ignore_def_ratio:
        defense *= 1 - options.ignore_def_ratio
    return max(DEFENSE_FLOOR, defense)


def crit_rate(attacker: BattleUnit, options: DamageOptions) -> float:
    rate = attacker.stats.crit_rate
    behavior = behavior_of(attacker.hero_class)
    if options.is_normal_skill and behavior.precision == "crit_bonus":
        rate += attacker.upgrade_points("precision") * attacker.skills.basic.upgrade_value("precision")
    if behavior.passive == "crit_bonus":
        bonus = attacker.skills.passive.value_for(attacker.level)
        if bonus is not None:
            rate += bonus
    return rate


def block_chance(defender: BattleUnit) -> float:
    if behavior_of(defender.hero_class).agility != "block":
        return 0.0
    return defender.upgrade_points("agility") * defender.skills.basic.upgrade_value("agility")


def compute_damage(
    attacker: BattleUnit,
    defender: BattleUnit,
    coefficient: float,
    options: DamageOptions | None = None,
    *,
    rng: RNG,
) -> DamageResult:
    """Return the damage ``attacker`` deals to ``defender`` with ``coefficient``."""
    options = options or DamageOptions()
    attack = effective_attack(attacker)
    defense_mod = defense_multiplier(effective_defense(attacker, defender, options))

    is_crit = rng.roll_percent(crit_rate(attacker, options))
    crit_mod = attacker.stats.crit_damage / 100 if is_crit else 1.0

    vulnerability = find_effect(defender.effects, "vulnerability")
    vuln_mod = 1 + vulnerability.value / 100 if vulnerability is not None else 1.0

    damage = round_half_up(
        attack * defense_mod * coefficient * crit_mod * vuln_mod * attacker.damage_factor
    )

    is_block = False
    chance = block_chance(defender)
    if chance > 0 and rng.roll_percent(chance):
        damage = round_half_up(damage * BLOCK_MULTIPLIER)
        is_block = True

    return DamageResult(damage=max(MIN_DAMAGE, damage), is_crit=is_crit, is_block=is_block)
