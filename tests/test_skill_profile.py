from __future__ import annotations

import pytest

from autobattle.data.repositories import SkillsRepository
from autobattle.domain.classes import HeroClass
from autobattle.domain.skill_profile import bonus_attack_chance, counter_chance, derive_basic_profile

_skills = SkillsRepository()


def _profile(hero_class: HeroClass, level: int = 1, **upgrades: int):
    return derive_basic_profile(hero_class, level, upgrades, _skills.get(hero_class))


def test_power_upgrades_raise_coefficient() -> None:
    assert _profile(HeroClass.SWORDSMAN).coefficient == pytest.approx(1.0)
    assert _profile(HeroClass.SWORDSMAN, power=2).coefficient == pytest.approx(1.6)
    assert _profile(HeroClass.FIRE_MAGE, potency=1).coefficient == pytest.approx(1.3)


def test_wind_mage_passive_adds_targets_from_level_three() -> None:
    assert _profile(HeroClass.WIND_MAGE, level=2).target_count == pytest.approx(1.0)
    assert _profile(HeroClass.WIND_MAGE, level=3, scale=2).target_count == pytest.approx(2.5)
    assert _profile(HeroClass.WIND_MAGE, level=6).target_count == pytest.approx(3.0)


def test_precision_depends_on_class() -> None:
    swordsman = _profile(HeroClass.SWORDSMAN, precision=2)
    axeman = _profile(HeroClass.AXEMAN, precision=2)
    spearman = _profile(HeroClass.SPEARMAN, precision=2)

    assert swordsman.ignore_def_val == 90
    assert swordsman.crit_bonus == 0
    assert axeman.crit_bonus == 60
    assert axeman.ignore_def_val == 0
    assert axeman.ignore_def_ratio == pytest.approx(0.4)
    assert spearman.back_row_chance == pytest.approx(0.9)


def test_counter_chance_only_for_countering_classes() -> None:
    assert counter_chance(HeroClass.SWORDSMAN, {"agility": 3}, _skills.get(HeroClass.SWORDSMAN)) == 75
    assert counter_chance(HeroClass.SPEARMAN, {}, _skills.get(HeroClass.SPEARMAN)) == 0
    assert counter_chance(HeroClass.AXEMAN, {"agility": 3}, _skills.get(HeroClass.AXEMAN)) == 0


def test_bonus_attack_chance() -> None:
    spear = _skills.get(HeroClass.SPEARMAN)

    assert bonus_attack_chance(HeroClass.WIND_MAGE, 1, _skills.get(HeroClass.WIND_MAGE)) == 25
    assert bonus_attack_chance(HeroClass.SPEARMAN, 2, spear) == 0
    assert bonus_attack_chance(HeroClass.SPEARMAN, 3, spear) == 50
    assert bonus_attack_chance(HeroClass.SPEARMAN, 6, spear) == 100
    assert bonus_attack_chance(HeroClass.SWORDSMAN, 8, _skills.get(HeroClass.SWORDSMAN)) == 0
