"""Base repository implementation for JSON definition data."""
from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Dict, Generic, List, TypeVar

from autobattle.data import paths
from autobattle.data.errors import DataLoadError, DataValidationError

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching, loading and field validation for repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        file_path = self._get_file_path()
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise DataLoadError(f"Definition file not found: {file_path}") from exc
        except OSError as exc:
            raise DataLoadError(f"Unable to read definition file: {file_path}") from exc
        except json.JSONDecodeError as exc:
            raise DataLoadError(f"Invalid JSON in {file_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return raw

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions keyed by id."""
        raise NotImplementedError

    def _ensure_loaded(self) -> Dict[str, T]:
        if self._definitions is None:
            self._definitions = self._build(self._load_raw())
        return self._definitions

    def get(self, def_id: object) -> T:
        """Return a definition by id (enum members and ints are accepted)."""
        definitions = self._ensure_loaded()
        key = self._normalize_id(def_id)
        try:
            return definitions[key]
        except KeyError as exc:
            raise KeyError(key) from exc

    def all(self) -> List[T]:
        """Return all definitions sorted deterministically by id."""
        definitions = self._ensure_loaded()
        return [definitions[key] for key in sorted(definitions.keys())]

    @staticmethod
    def _normalize_id(def_id: object) -> str:
        if isinstance(def_id, Enum):
            return str(def_id.value)
        return str(def_id)

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object.")
        return value

    @staticmethod
    def _assert_fields(
        payload: dict[str, object],
        required: set[str],
        context: str,
        *,
        optional: set[str] | None = None,
    ) -> None:
        actual = set(payload.keys())
        missing = required - actual
        unknown = actual - required - (optional or set())
        if missing or unknown:
            problems = []
            if missing:
                problems.append(f"missing fields: {sorted(missing)}")
            if unknown:
                problems.append(f"unknown fields: {sorted(unknown)}")
            raise DataValidationError(f"{context} has schema issues ({'; '.join(problems)}).")

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _require_number(value: object, context: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataValidationError(f"{context} must be a number.")
        if value < 0:
            raise DataValidationError(f"{context} must not be negative.")
        return float(value)

    @classmethod
    def _optional_number(cls, payload: dict[str, object], key: str, context: str) -> float | None:
        if key not in payload or payload[key] is None:
            return None
        return cls._require_number(payload[key], f"{context} {key}")

    @staticmethod
    def _require_list(value: object, context: str) -> list[object]:
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list.")
        return value
