"""Factory helpers for heroes and battle units."""

from .hero_factory import create_hero
from .id_factory import make_instance_id
from .unit_factory import (
    create_battle_unit,
    create_enemy_roster,
    create_enemy_unit,
    create_player_units,
)

__all__ = [
    "create_battle_unit",
    "create_enemy_roster",
    "create_enemy_unit",
    "create_hero",
    "create_player_units",
    "make_instance_id",
]
