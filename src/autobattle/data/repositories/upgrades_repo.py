"""Upgrade category repository."""
from __future__ import annotations

from typing import Dict, List

from autobattle.data.errors import DataValidationError
from autobattle.data.repositories.base import RepositoryBase
from autobattle.domain.classes import Category
from autobattle.domain.defs import UpgradeCategoryDef


class UpgradesRepository(RepositoryBase[UpgradeCategoryDef]):
    """Loads upgrade categories and their investment caps."""

    def __init__(self, base_path=None) -> None:
        super().__init__("upgrades.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, UpgradeCategoryDef]:
        upgrades: Dict[str, UpgradeCategoryDef] = {}
        for raw_id, payload in raw.items():
            context = f"upgrade '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_fields(data, {"name", "max_points", "category", "description"}, context)
            max_points = self._require_int(data["max_points"], f"{context} max_points")
            if max_points < 1:
                raise DataValidationError(f"{context} max_points must be at least 1.")
            raw_category = self._require_str(data["category"], f"{context} category")
            try:
                category = Category(raw_category)
            except ValueError as exc:
                raise DataValidationError(
                    f"{context} category must be one of {sorted(c.value for c in Category)}."
                ) from exc
            upgrades[raw_id] = UpgradeCategoryDef(
                id=raw_id,
                name=self._require_str(data["name"], f"{context} name"),
                max_points=max_points,
                category=category,
                description=self._require_str(data["description"], f"{context} description"),
            )
        return upgrades

    def for_category(self, category: Category) -> List[UpgradeCategoryDef]:
        return [upgrade for upgrade in self.all() if upgrade.category is category]
