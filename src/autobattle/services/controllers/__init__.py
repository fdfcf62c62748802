"""UI-agnostic controllers for battle flow orchestration."""
from __future__ import annotations

from .battle_controller import BattleController, StepCallback

__all__ = [
    "BattleController",
    "StepCallback",
]
