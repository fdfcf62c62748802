"""Hero class identities and the warrior/mage split derived from them."""
from __future__ import annotations

from enum import Enum


class HeroClass(str, Enum):
    SWORDSMAN = "swordsman"
    AXEMAN = "axeman"
    SPEARMAN = "spearman"
    FIRE_MAGE = "fire_mage"
    WIND_MAGE = "wind_mage"
    LIGHTNING_MAGE = "lightning_mage"

    def __str__(self) -> str:
        return self.value


class Category(str, Enum):
    WARRIOR = "warrior"
    MAGE = "mage"

    def __str__(self) -> str:
        return self.value


WARRIOR_CLASSES = frozenset({HeroClass.SWORDSMAN, HeroClass.AXEMAN, HeroClass.SPEARMAN})

MIN_LEVEL = 1
MAX_LEVEL = 8
PASSIVE_UNLOCK_LEVEL = 3
ULTIMATE_UNLOCK_LEVEL = 4
PASSIVE_UPGRADE_LEVEL = 6
ULTIMATE_UPGRADE_LEVEL = 8

# Upgrade categories read by the combat formulas, per class family.
POWER_CATEGORY = {Category.WARRIOR: "power", Category.MAGE: "potency"}
RANGE_CATEGORY = {Category.WARRIOR: "range", Category.MAGE: "scale"}


def category_of(hero_class: HeroClass) -> Category:
    """Return the damage category implied by ``hero_class``."""
    return Category.WARRIOR if hero_class in WARRIOR_CLASSES else Category.MAGE

