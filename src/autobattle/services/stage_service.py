"""Stage selection and progression."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List

from autobattle.core.rng import RNG
from autobattle.core.types import Side
from autobattle.data.repositories import ClassesRepository, SkillsRepository, StagesRepository
from autobattle.domain.battle_models import BattleUnit
from autobattle.domain.defs import StageDef
from autobattle.services.errors import StageLockedError
from autobattle.services.factories import create_enemy_roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StageProgress:
    """Highest stage the player may challenge; stages up to it are unlocked."""

    unlocked_stage: int = 1


@dataclass(frozen=True, slots=True)
class StageResult:
    progress: StageProgress
    stage_cleared: bool


class StageService:
    def __init__(
        self,
        *,
        stages_repo: StagesRepository,
        classes_repo: ClassesRepository,
        skills_repo: SkillsRepository,
    ) -> None:
        self._stages_repo = stages_repo
        self._classes_repo = classes_repo
        self._skills_repo = skills_repo

    def get_stage(self, stage_id: int) -> StageDef:
        return self._stages_repo.get(stage_id)

    def is_unlocked(self, progress: StageProgress, stage_id: int) -> bool:
        return 1 <= stage_id <= progress.unlocked_stage

    def build_enemy_units(
        self, stage_id: int, rng: RNG, progress: StageProgress | None = None
    ) -> List[BattleUnit]:
        """Roll the enemy side for ``stage_id``; with ``progress`` the stage must be unlocked."""
        if progress is not None and not self.is_unlocked(progress, stage_id):
            raise StageLockedError(
                f"Stage {stage_id} is locked; clear stage {progress.unlocked_stage} first."
            )
        stage = self.get_stage(stage_id)
        return create_enemy_roster(
            stage,
            classes_repo=self._classes_repo,
            skills_repo=self._skills_repo,
            rng=rng,
        )

    def record_result(self, progress: StageProgress, stage_id: int, winner: Side) -> StageResult:
        """Advance the frontier when the player wins the frontier stage."""
        if winner != "player" or stage_id != progress.unlocked_stage:
            return StageResult(progress=progress, stage_cleared=False)
        if progress.unlocked_stage < self._stages_repo.count():
            progress = replace(progress, unlocked_stage=progress.unlocked_stage + 1)
            logger.info(f"Stage {stage_id} cleared; stage {progress.unlocked_stage} unlocked")
        return StageResult(progress=progress, stage_cleared=True)
