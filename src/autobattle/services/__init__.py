"""Service layer exports."""

from .errors import BattleSetupError, FactoryError, StageLockedError
from .action_resolver import ActionOutcome, ActionResolver
from .battle_service import BattleService, StepResult
from .roster_service import DismissResult, LevelUpResult, RosterService, UpgradeSpendResult
from .stage_service import StageProgress, StageResult, StageService

__all__ = [
    "BattleSetupError",
    "FactoryError",
    "StageLockedError",
    "ActionOutcome",
    "ActionResolver",
    "BattleService",
    "StepResult",
    "DismissResult",
    "LevelUpResult",
    "RosterService",
    "UpgradeSpendResult",
    "StageProgress",
    "StageResult",
    "StageService",
]
