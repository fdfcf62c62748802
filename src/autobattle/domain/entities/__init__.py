"""Runtime entity exports."""

from .hero import Hero
from .stats import CombatStats

__all__ = [
    "CombatStats",
    "Hero",
]
