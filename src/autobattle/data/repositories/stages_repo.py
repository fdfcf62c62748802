"""Stage repository."""
from __future__ import annotations

from typing import Dict, List, Tuple

from autobattle.data.errors import DataReferenceError, DataValidationError
from autobattle.data.repositories.base import RepositoryBase
from autobattle.domain.classes import MAX_LEVEL, MIN_LEVEL, HeroClass
from autobattle.domain.defs import StageDef


class StagesRepository(RepositoryBase[StageDef]):
    """Loads stage encounters; stage ids are consecutive integers from 1."""

    def __init__(self, base_path=None) -> None:
        super().__init__("stages.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, StageDef]:
        stages: Dict[str, StageDef] = {}
        for raw_id, payload in raw.items():
            context = f"stage '{raw_id}'"
            try:
                stage_id = int(raw_id)
            except ValueError as exc:
                raise DataValidationError(f"{context} id must be an integer.") from exc
            data = self._require_mapping(payload, context)
            self._assert_fields(
                data, {"enemy_level", "weakening_factor", "front_pool", "back_pool"}, context
            )
            enemy_level = self._require_int(data["enemy_level"], f"{context} enemy_level")
            if not MIN_LEVEL <= enemy_level <= MAX_LEVEL:
                raise DataValidationError(f"{context} enemy_level must be {MIN_LEVEL}-{MAX_LEVEL}.")
            stages[str(stage_id)] = StageDef(
                id=stage_id,
                enemy_level=enemy_level,
                weakening_factor=self._require_number(
                    data["weakening_factor"], f"{context} weakening_factor"
                ),
                front_pool=self._parse_pool(data["front_pool"], f"{context} front_pool"),
                back_pool=self._parse_pool(data["back_pool"], f"{context} back_pool"),
            )
        expected = {str(index) for index in range(1, len(stages) + 1)}
        if set(stages) != expected:
            raise DataValidationError("Stage ids must be consecutive integers starting at 1.")
        return stages

    def all(self) -> List[StageDef]:
        """Return all stages ordered by id."""
        return sorted(super().all(), key=lambda stage: stage.id)

    def count(self) -> int:
        return len(self._ensure_loaded())

    def _parse_pool(self, value: object, context: str) -> Tuple[HeroClass, ...]:
        entries = self._require_list(value, context)
        if not entries:
            raise DataValidationError(f"{context} must not be empty.")
        pool = []
        for entry in entries:
            raw_class = self._require_str(entry, f"{context} entries")
            try:
                pool.append(HeroClass(raw_class))
            except ValueError as exc:
                raise DataReferenceError(f"{context} references unknown class '{raw_class}'.") from exc
        return tuple(pool)
