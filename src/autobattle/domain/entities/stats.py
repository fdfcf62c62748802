"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CombatStats:
    """Base combat stats for one class at one level."""

    hp: int
    p_atk: int
    p_def: int
    m_atk: int
    m_def: int
    speed: int
    crit_rate: float
    crit_damage: float
