"""Shared type aliases for the core and domain layers."""
from typing import Literal

Side = Literal["player", "enemy"]
EffectType = Literal["dot", "burn", "charge", "def_down", "vulnerability", "stun"]
SkillType = Literal["normal", "ultimate", "dot"]

__all__ = ["EffectType", "Side", "SkillType"]
