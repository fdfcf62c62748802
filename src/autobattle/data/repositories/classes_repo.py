"""Attribute table repository: base stats per class per level."""
from __future__ import annotations

from typing import Dict

from autobattle.data.errors import DataReferenceError, DataValidationError
from autobattle.data.repositories.base import RepositoryBase
from autobattle.domain.classes import MAX_LEVEL, MIN_LEVEL, HeroClass
from autobattle.domain.defs import ClassDef
from autobattle.domain.entities import CombatStats

STAT_FIELDS = {"hp", "p_atk", "p_def", "m_atk", "m_def", "speed", "crit_rate", "crit_damage"}
INT_STAT_FIELDS = ("hp", "p_atk", "p_def", "m_atk", "m_def", "speed")


class ClassesRepository(RepositoryBase[ClassDef]):
    """Loads the attribute table and checks every level 1-8 is present."""

    def __init__(self, base_path=None) -> None:
        super().__init__("attributes.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ClassDef]:
        classes: Dict[str, ClassDef] = {}
        for raw_id, payload in raw.items():
            try:
                hero_class = HeroClass(raw_id)
            except ValueError as exc:
                raise DataReferenceError(f"attributes reference unknown class '{raw_id}'.") from exc
            context = f"class '{raw_id}'"
            class_data = self._require_mapping(payload, context)
            self._assert_fields(class_data, {"name", "levels"}, context)
            levels_data = self._require_mapping(class_data["levels"], f"{context} levels")

            levels: Dict[int, CombatStats] = {}
            for raw_level, stats_payload in levels_data.items():
                try:
                    level = int(raw_level)
                except ValueError as exc:
                    raise DataValidationError(f"{context} level keys must be integers.") from exc
                levels[level] = self._build_stats(stats_payload, f"{context} level {level}")

            expected = set(range(MIN_LEVEL, MAX_LEVEL + 1))
            if set(levels) != expected:
                raise DataValidationError(
                    f"{context} must define exactly levels {MIN_LEVEL}-{MAX_LEVEL}, got {sorted(levels)}."
                )

            classes[raw_id] = ClassDef(
                id=hero_class,
                name=self._require_str(class_data["name"], f"{context} name"),
                levels=levels,
            )
        return classes

    def _build_stats(self, payload: object, context: str) -> CombatStats:
        stats_data = self._require_mapping(payload, context)
        self._assert_fields(stats_data, STAT_FIELDS, context)
        ints = {}
        for key in INT_STAT_FIELDS:
            value = self._require_int(stats_data[key], f"{context} {key}")
            if value < 0:
                raise DataValidationError(f"{context} {key} must not be negative.")
            ints[key] = value
        return CombatStats(
            crit_rate=self._require_number(stats_data["crit_rate"], f"{context} crit_rate"),
            crit_damage=self._require_number(stats_data["crit_damage"], f"{context} crit_damage"),
            **ints,
        )
