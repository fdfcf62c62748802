import pytest

from autobattle.core.rng import RNG
from autobattle.data.repositories import ClassesRepository, SkillsRepository
from autobattle.domain.battle_models import Formation
from autobattle.domain.classes import HeroClass
from autobattle.domain.defs import StageDef
from autobattle.services.errors import FactoryError
from autobattle.services.factories import (
    create_battle_unit,
    create_enemy_unit,
    create_hero,
    create_player_units,
    make_instance_id,
)


def test_make_instance_id_skips_taken_ids() -> None:
    first = make_instance_id("hero", RNG(1))
    second = make_instance_id("hero", RNG(1), taken={first})

    assert first.startswith("hero_")
    assert second != first


def test_create_hero_uses_attribute_table() -> None:
    hero = create_hero(
        HeroClass.SPEARMAN,
        "Lance",
        classes_repo=ClassesRepository(),
        rng=RNG(3),
        level=3,
        skill_upgrades={"power": 1},
    )

    assert hero.name == "Lance"
    assert hero.level == 3
    assert hero.stats.speed == 110
    assert hero.skill_upgrades == {"power": 1}
    assert hero.category.value == "warrior"


def test_create_hero_rejects_bad_level_and_class() -> None:
    with pytest.raises(FactoryError):
        create_hero(HeroClass.AXEMAN, "A", classes_repo=ClassesRepository(), rng=RNG(1), level=9)
    with pytest.raises(FactoryError):
        create_hero("druid", "D", classes_repo=ClassesRepository(), rng=RNG(1))


def test_create_battle_unit_starts_at_full_health_with_initial_cooldown() -> None:
    hero = create_hero(HeroClass.SWORDSMAN, "Blade", classes_repo=ClassesRepository(), rng=RNG(4))

    unit = create_battle_unit(hero, "player", 3, skills_repo=SkillsRepository())

    assert unit.current_hp == unit.max_hp == hero.stats.hp
    assert unit.cooldowns == {"Blade Dance": 1}
    assert unit.effects == []
    assert unit.accumulated_dmg_bonus == 0
    assert not unit.is_front_row
    assert unit.source_id == hero.id


def test_create_battle_unit_copies_upgrades() -> None:
    hero = create_hero(
        HeroClass.FIRE_MAGE,
        "Ember",
        classes_repo=ClassesRepository(),
        rng=RNG(4),
        skill_upgrades={"duration": 2},
    )

    unit = create_battle_unit(hero, "player", 0, skills_repo=SkillsRepository())
    unit.skill_upgrades["duration"] = 5

    assert hero.skill_upgrades == {"duration": 2}


def test_create_battle_unit_rejects_bad_position() -> None:
    hero = create_hero(HeroClass.SWORDSMAN, "Blade", classes_repo=ClassesRepository(), rng=RNG(4))

    with pytest.raises(FactoryError):
        create_battle_unit(hero, "player", 6, skills_repo=SkillsRepository())


def test_create_player_units_follows_formation() -> None:
    classes_repo = ClassesRepository()
    front = create_hero(HeroClass.AXEMAN, "Front", classes_repo=classes_repo, rng=RNG(10))
    back = create_hero(HeroClass.WIND_MAGE, "Back", classes_repo=classes_repo, rng=RNG(11))
    formation = Formation(front=(None, front.id), back=(None, None, back.id, None))

    units = create_player_units(
        formation, {front.id: front, back.id: back}, skills_repo=SkillsRepository()
    )

    assert [(unit.name, unit.position) for unit in units] == [("Front", 1), ("Back", 4)]
    assert all(unit.side == "player" for unit in units)


def test_create_player_units_rejects_unknown_hero() -> None:
    formation = Formation(front=("missing", None))

    with pytest.raises(FactoryError):
        create_player_units(formation, {}, skills_repo=SkillsRepository())


def test_formation_requires_exact_slots() -> None:
    with pytest.raises(ValueError):
        Formation(front=(None,))


def test_create_enemy_unit_rejects_level_outside_attribute_table() -> None:
    stage = StageDef(
        id=99,
        enemy_level=9,
        weakening_factor=1.0,
        front_pool=(HeroClass.SWORDSMAN,),
        back_pool=(HeroClass.FIRE_MAGE,),
    )

    with pytest.raises(FactoryError):
        create_enemy_unit(
            HeroClass.SWORDSMAN,
            stage,
            0,
            classes_repo=ClassesRepository(),
            skills_repo=SkillsRepository(),
            instance_id="enemy_front_0",
        )


def test_formation_retain_clears_unknown_heroes() -> None:
    formation = Formation(front=("a", "gone"), back=(None, "b", "gone", None))

    pruned = formation.retain(["a", "b"])

    assert pruned == Formation(front=("a", None), back=(None, "b", None, None))
    assert formation.front == ("a", "gone")
