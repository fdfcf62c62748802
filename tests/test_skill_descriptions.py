from __future__ import annotations

from autobattle.data.repositories import SkillsRepository
from autobattle.domain.classes import HeroClass
from autobattle.domain.skill_descriptions import describe_skills
from tests.helpers.battle_fixtures import make_unit

_skills = SkillsRepository()


def _describe(hero_class: HeroClass, level: int = 1, **upgrades: int):
    unit = make_unit(hero_class, "hero", level=level, skill_upgrades=upgrades)
    return describe_skills(unit, _skills.get(hero_class))


def test_swordsman_descriptions_without_upgrades() -> None:
    descriptions = _describe(HeroClass.SWORDSMAN)

    assert descriptions.basic == "Deals 100% physical damage to the target."
    assert descriptions.ultimate == (
        "Deals 200% physical damage and heals for 50% of the damage dealt. (Cooldown: 3 turns)"
    )
    assert descriptions.passive == "Gains 25% damage and 20% damage reduction."
    assert not descriptions.passive_unlocked
    assert not descriptions.ultimate_unlocked


def test_upgraded_tiers_are_described_at_high_levels() -> None:
    descriptions = _describe(HeroClass.SWORDSMAN, level=8)

    assert descriptions.ultimate.startswith("Deals 400% physical damage")
    assert descriptions.passive == "Gains 50% damage and 30% damage reduction."
    assert descriptions.passive_unlocked
    assert descriptions.ultimate_unlocked


def test_basic_addons_reflect_upgrades() -> None:
    descriptions = _describe(HeroClass.SWORDSMAN, power=1, precision=1, agility=2)

    assert descriptions.basic == (
        "Deals 130% physical damage to the target. [Defense break +45, 50% counter]"
    )


def test_axeman_addons_and_percent_special() -> None:
    descriptions = _describe(HeroClass.AXEMAN, level=4, precision=1, agility=1, range=1)

    assert descriptions.basic == (
        "Deals 80% physical damage, ignoring 40% of the target's physical defense. "
        "[Targets +0.25, Basic crit +30%, 25% block]"
    )
    assert "lowers their physical defense by 50%" in descriptions.ultimate


def test_mage_duration_addons() -> None:
    fire = _describe(HeroClass.FIRE_MAGE, duration=2)
    wind = _describe(HeroClass.WIND_MAGE, duration=1)
    bolt = _describe(HeroClass.LIGHTNING_MAGE, level=8, duration=1)

    assert fire.basic == "Deals 100% magic damage to the target. [Burn +40%]"
    assert wind.basic == (
        "Deals 80% magic damage with a 25% chance to trigger again. [Vulnerability +10%]"
    )
    assert bolt.basic.endswith("[Charge +10%]")
    assert "dealing 200% of the coefficient" in bolt.ultimate


def test_spearman_back_row_chance_includes_precision() -> None:
    descriptions = _describe(HeroClass.SPEARMAN, precision=2)

    assert descriptions.basic == (
        "Deals 80% physical damage with a 90% chance to strike the back row instead."
    )
