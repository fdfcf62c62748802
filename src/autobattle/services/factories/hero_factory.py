"""Factory for creating hero templates from the attribute table."""
from __future__ import annotations

from typing import Collection, Mapping

from autobattle.core.rng import RNG
from autobattle.data.repositories import ClassesRepository
from autobattle.domain.classes import MAX_LEVEL, MIN_LEVEL, HeroClass
from autobattle.domain.entities import Hero
from autobattle.services.errors import FactoryError

from .id_factory import make_instance_id


def create_hero(
    hero_class: HeroClass,
    name: str,
    *,
    classes_repo: ClassesRepository,
    rng: RNG,
    level: int = MIN_LEVEL,
    skill_upgrades: Mapping[str, int] | None = None,
    available_points: int = 0,
    taken_ids: Collection[str] = (),
) -> Hero:
    """Instantiate a hero of ``hero_class`` with stats for ``level``."""
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise FactoryError(f"Hero level must be {MIN_LEVEL}-{MAX_LEVEL}, got {level}.")
    try:
        class_def = classes_repo.get(hero_class)
    except KeyError as exc:
        raise FactoryError(f"Class '{hero_class}' not found.") from exc

    return Hero(
        id=make_instance_id("hero", rng, taken=taken_ids),
        name=name,
        hero_class=class_def.id,
        level=level,
        stats=class_def.stats_at(level),
        skill_upgrades=dict(skill_upgrades or {}),
        available_points=available_points,
    )
