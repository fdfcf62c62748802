from __future__ import annotations

import pytest

from autobattle.data.repositories import ClassesRepository, SkillsRepository, UpgradesRepository
from autobattle.domain.battle_models import Formation
from autobattle.domain.classes import MAX_LEVEL, HeroClass
from autobattle.services import FactoryError, RosterService
from autobattle.services.factories import create_player_units
from tests.helpers.battle_fixtures import ScriptedRNG


def _make_service() -> RosterService:
    return RosterService(classes_repo=ClassesRepository(), upgrades_repo=UpgradesRepository())


def test_recruit_creates_level_one_hero_with_numbered_name() -> None:
    service = _make_service()
    rng = ScriptedRNG(seed=5)

    first = service.recruit(HeroClass.SWORDSMAN, rng=rng)
    second = service.recruit(HeroClass.SWORDSMAN, rng=rng, roster=[first])
    named = service.recruit(HeroClass.WIND_MAGE, "Gale", rng=rng, roster=[first, second])

    assert first.name == "Swordsman 1"
    assert second.name == "Swordsman 2"
    assert named.name == "Gale"
    assert first.level == 1
    assert first.available_points == 0
    assert first.skill_upgrades == {}
    assert first.stats.hp == 145
    assert len({first.id, second.id, named.id}) == 3


def test_recruit_unknown_class_raises_factory_error() -> None:
    with pytest.raises(FactoryError):
        _make_service().recruit("necromancer", rng=ScriptedRNG())


def test_level_up_refreshes_stats_and_grants_a_point() -> None:
    service = _make_service()
    hero = service.recruit(HeroClass.FIRE_MAGE, rng=ScriptedRNG())

    result = service.level_up(hero)

    assert result.success
    assert hero.level == 2
    assert hero.stats == ClassesRepository().get(HeroClass.FIRE_MAGE).stats_at(2)
    assert hero.available_points == 1


def test_level_up_stops_at_max_level() -> None:
    service = _make_service()
    hero = service.recruit(HeroClass.AXEMAN, rng=ScriptedRNG())
    for _ in range(MAX_LEVEL - 1):
        assert service.level_up(hero).success

    result = service.level_up(hero)

    assert not result.success
    assert hero.level == MAX_LEVEL
    assert hero.available_points == MAX_LEVEL - 1


def test_spend_upgrade_point_success() -> None:
    service = _make_service()
    hero = service.recruit(HeroClass.SWORDSMAN, rng=ScriptedRNG())
    service.level_up(hero)

    result = service.spend_upgrade_point(hero, "power")

    assert result.success
    assert hero.skill_upgrades == {"power": 1}
    assert hero.available_points == 0


def test_spend_upgrade_point_rejections() -> None:
    service = _make_service()
    hero = service.recruit(HeroClass.SWORDSMAN, rng=ScriptedRNG())

    no_points = service.spend_upgrade_point(hero, "power")
    assert not no_points.success
    assert no_points.message == "No upgrade points available."

    hero.available_points = 2
    assert not service.spend_upgrade_point(hero, "charisma").success
    assert not service.spend_upgrade_point(hero, "potency").success

    hero.skill_upgrades["precision"] = 3
    capped = service.spend_upgrade_point(hero, "precision")
    assert not capped.success
    assert hero.skill_upgrades["precision"] == 3
    assert hero.available_points == 2


def test_every_category_is_bounded_by_its_maximum() -> None:
    service = _make_service()
    upgrades = UpgradesRepository()
    hero = service.recruit(HeroClass.LIGHTNING_MAGE, rng=ScriptedRNG())
    hero.available_points = 100

    for upgrade in upgrades.for_category(hero.category):
        while service.spend_upgrade_point(hero, upgrade.id).success:
            pass
        assert hero.skill_upgrades[upgrade.id] == upgrade.max_points


def test_dismiss_removes_hero_and_clears_its_formation_slot() -> None:
    service = _make_service()
    rng = ScriptedRNG(seed=3)
    sword = service.recruit(HeroClass.SWORDSMAN, rng=rng)
    fire = service.recruit(HeroClass.FIRE_MAGE, rng=rng, roster=[sword])
    formation = Formation(front=(sword.id, None), back=(fire.id, None, None, None))

    result = service.dismiss([sword, fire], sword.id, formation)

    assert result.success
    assert result.roster == (fire,)
    assert result.formation == Formation(back=(fire.id, None, None, None))
    units = create_player_units(
        result.formation, {hero.id: hero for hero in result.roster}, skills_repo=SkillsRepository()
    )
    assert [unit.instance_id for unit in units] == [fire.id]


def test_dismiss_unknown_hero_fails_without_changes() -> None:
    service = _make_service()
    sword = service.recruit(HeroClass.SWORDSMAN, rng=ScriptedRNG())

    result = service.dismiss([sword], "missing")

    assert not result.success
    assert result.message == "Hero not found."
    assert result.roster == (sword,)
    assert result.formation == Formation()
