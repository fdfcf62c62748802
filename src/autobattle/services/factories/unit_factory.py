"""Factories turning hero templates and stages into battle units."""
from __future__ import annotations

from typing import List, Mapping

from autobattle.core.rng import RNG
from autobattle.core.types import Side
from autobattle.data.repositories import ClassesRepository, SkillsRepository
from autobattle.domain.battle_models import BACK_ROW_SLOTS, FRONT_ROW_SLOTS, BattleUnit, Formation
from autobattle.domain.classes import POWER_CATEGORY, HeroClass, category_of
from autobattle.domain.defs import SkillSetDef, StageDef
from autobattle.domain.entities import Hero
from autobattle.services.errors import FactoryError

MAX_POSITION = FRONT_ROW_SLOTS + BACK_ROW_SLOTS - 1


def create_battle_unit(
    hero: Hero,
    side: Side,
    position: int,
    damage_factor: float = 1.0,
    *,
    skills_repo: SkillsRepository,
) -> BattleUnit:
    """Build a full-health battle unit from ``hero``."""
    if not 0 <= position <= MAX_POSITION:
        raise FactoryError(f"Position must be 0-{MAX_POSITION}, got {position}.")
    skills = _get_skill_set(hero.hero_class, skills_repo)
    return BattleUnit(
        instance_id=hero.id,
        name=hero.name,
        hero_class=hero.hero_class,
        level=hero.level,
        stats=hero.stats,
        skills=skills,
        side=side,
        position=position,
        current_hp=hero.stats.hp,
        max_hp=hero.stats.hp,
        skill_upgrades=dict(hero.skill_upgrades),
        cooldowns={skills.ultimate.name: skills.ultimate.initial_cooldown},
        damage_factor=damage_factor,
        source_id=hero.id,
    )


def create_player_units(
    formation: Formation,
    heroes: Mapping[str, Hero],
    *,
    skills_repo: SkillsRepository,
) -> List[BattleUnit]:
    """Build the player side from a formation, front row first."""
    units: List[BattleUnit] = []
    for hero_id, position in formation.placements():
        hero = heroes.get(hero_id)
        if hero is None:
            raise FactoryError(f"Hero '{hero_id}' in formation is not on the roster.")
        units.append(create_battle_unit(hero, "player", position, skills_repo=skills_repo))
    return units


def create_enemy_unit(
    hero_class: HeroClass,
    stage: StageDef,
    position: int,
    *,
    classes_repo: ClassesRepository,
    skills_repo: SkillsRepository,
    instance_id: str,
) -> BattleUnit:
    """Build a fully invested enemy of ``hero_class`` at the stage's level."""
    try:
        class_def = classes_repo.get(hero_class)
    except KeyError as exc:
        raise FactoryError(f"Class '{hero_class}' not found.") from exc

    level = stage.enemy_level
    try:
        stats = class_def.stats_at(level)
    except KeyError as exc:
        raise FactoryError(f"Class '{hero_class}' has no stats for level {level}.") from exc
    power_key = POWER_CATEGORY[category_of(hero_class)]
    template = Hero(
        id=instance_id,
        name=f"Lv.{level} Enemy {class_def.name}",
        hero_class=hero_class,
        level=level,
        stats=stats,
        skill_upgrades={power_key: level - 1},
    )
    return create_battle_unit(
        template, "enemy", position, damage_factor=stage.weakening_factor, skills_repo=skills_repo
    )


def create_enemy_roster(
    stage: StageDef,
    *,
    classes_repo: ClassesRepository,
    skills_repo: SkillsRepository,
    rng: RNG,
) -> List[BattleUnit]:
    """Roll two front-row and four back-row enemies from the stage pools."""
    enemies: List[BattleUnit] = []
    for index in range(FRONT_ROW_SLOTS):
        enemies.append(
            create_enemy_unit(
                rng.choice(stage.front_pool),
                stage,
                index,
                classes_repo=classes_repo,
                skills_repo=skills_repo,
                instance_id=f"enemy_front_{index}",
            )
        )
    for index in range(BACK_ROW_SLOTS):
        enemies.append(
            create_enemy_unit(
                rng.choice(stage.back_pool),
                stage,
                index + FRONT_ROW_SLOTS,
                classes_repo=classes_repo,
                skills_repo=skills_repo,
                instance_id=f"enemy_back_{index}",
            )
        )
    return enemies


def _get_skill_set(hero_class: HeroClass, skills_repo: SkillsRepository) -> SkillSetDef:
    try:
        return skills_repo.get(hero_class)
    except KeyError as exc:
        raise FactoryError(f"No skill set configured for class '{hero_class}'.") from exc
