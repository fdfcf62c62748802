"""Roster service: recruiting heroes, levelling them and spending upgrade points."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from autobattle.core.rng import RNG
from autobattle.data.repositories import ClassesRepository, UpgradesRepository
from autobattle.domain.battle_models import Formation
from autobattle.domain.classes import MAX_LEVEL, HeroClass
from autobattle.domain.entities import Hero
from autobattle.services.errors import FactoryError
from autobattle.services.factories import create_hero

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 1


@dataclass(frozen=True, slots=True)
class LevelUpResult:
    success: bool
    message: str
    hero: Hero


@dataclass(frozen=True, slots=True)
class UpgradeSpendResult:
    success: bool
    message: str
    hero: Hero


@dataclass(frozen=True, slots=True)
class DismissResult:
    success: bool
    message: str
    roster: Tuple[Hero, ...]
    formation: Formation


class RosterService:
    """Manage the player's heroes between battles."""

    def __init__(self, *, classes_repo: ClassesRepository, upgrades_repo: UpgradesRepository) -> None:
        self._classes_repo = classes_repo
        self._upgrades_repo = upgrades_repo

    def recruit(
        self,
        hero_class: HeroClass,
        name: str | None = None,
        *,
        rng: RNG,
        roster: Sequence[Hero] = (),
    ) -> Hero:
        """Create a level 1 hero; unnamed recruits are numbered per class."""
        if name is None:
            try:
                class_def = self._classes_repo.get(hero_class)
            except KeyError as exc:
                raise FactoryError(f"Class '{hero_class}' not found.") from exc
            same_class = sum(1 for hero in roster if hero.hero_class is hero_class)
            name = f"{class_def.name} {same_class + 1}"
        hero = create_hero(
            hero_class,
            name,
            classes_repo=self._classes_repo,
            rng=rng,
            taken_ids={hero.id for hero in roster},
        )
        logger.info(f"Recruited {hero.name} ({hero.hero_class})")
        return hero

    def level_up(self, hero: Hero) -> LevelUpResult:
        if hero.level >= MAX_LEVEL:
            return LevelUpResult(
                success=False,
                message=f"{hero.name} is already at the maximum level.",
                hero=hero,
            )
        hero.level += 1
        hero.stats = self._classes_repo.get(hero.hero_class).stats_at(hero.level)
        hero.available_points += POINTS_PER_LEVEL
        logger.debug(f"{hero.name} reached level {hero.level}")
        return LevelUpResult(
            success=True,
            message=f"{hero.name} reached level {hero.level}.",
            hero=hero,
        )

    def spend_upgrade_point(self, hero: Hero, category: str) -> UpgradeSpendResult:
        try:
            upgrade = self._upgrades_repo.get(category)
        except KeyError:
            return UpgradeSpendResult(success=False, message="Invalid upgrade category.", hero=hero)
        if upgrade.category is not hero.category:
            return UpgradeSpendResult(
                success=False,
                message=f"{upgrade.name} is only available to {upgrade.category} classes.",
                hero=hero,
            )
        if hero.available_points <= 0:
            return UpgradeSpendResult(success=False, message="No upgrade points available.", hero=hero)
        current = hero.upgrade_points(category)
        if current >= upgrade.max_points:
            return UpgradeSpendResult(
                success=False,
                message=f"{upgrade.name} is already at {upgrade.max_points} points.",
                hero=hero,
            )
        hero.skill_upgrades[category] = current + 1
        hero.available_points -= 1
        return UpgradeSpendResult(
            success=True,
            message=f"{upgrade.name} increased to {current + 1}.",
            hero=hero,
        )

    def dismiss(
        self,
        roster: Sequence[Hero],
        hero_id: str,
        formation: Formation | None = None,
    ) -> DismissResult:
        """Remove a hero from the roster and clear any formation slot still holding it."""
        formation = formation or Formation()
        remaining = tuple(hero for hero in roster if hero.id != hero_id)
        if len(remaining) == len(roster):
            return DismissResult(
                success=False,
                message="Hero not found.",
                roster=tuple(roster),
                formation=formation.retain(hero.id for hero in roster),
            )
        dismissed = next(hero for hero in roster if hero.id == hero_id)
        logger.info(f"Dismissed {dismissed.name} ({dismissed.hero_class})")
        return DismissResult(
            success=True,
            message=f"{dismissed.name} left the party.",
            roster=remaining,
            formation=formation.retain(hero.id for hero in remaining),
        )
