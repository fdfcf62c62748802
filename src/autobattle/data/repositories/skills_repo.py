"""Skill catalog repository."""
from __future__ import annotations

from typing import Dict

from autobattle.data.errors import DataReferenceError, DataValidationError
from autobattle.data.repositories.base import RepositoryBase
from autobattle.data.repositories.upgrades_repo import UpgradesRepository
from autobattle.domain.classes import HeroClass, category_of
from autobattle.domain.defs import BasicSkillDef, PassiveSkillDef, SkillSetDef, UltimateSkillDef

BASIC_FIELDS = {"name", "description", "coefficient", "upgrade_values"}
BASIC_OPTIONAL = {"ignore_defense", "extra_chance", "back_row_chance"}
ULTIMATE_FIELDS = {
    "name",
    "description",
    "cooldown",
    "initial_cooldown",
    "base_coefficient",
    "upgraded_coefficient",
}
ULTIMATE_OPTIONAL = {"special_value", "upgraded_special_value"}
PASSIVE_FIELDS = {"name", "description", "value", "upgraded_value"}
PASSIVE_OPTIONAL = {"secondary_value", "upgraded_secondary_value"}
RATIO_FIELDS = ("ignore_defense", "extra_chance", "back_row_chance")


class SkillsRepository(RepositoryBase[SkillSetDef]):
    """Loads the per-class skill sets and validates upgrade references."""

    def __init__(self, upgrades_repo: UpgradesRepository | None = None, base_path=None) -> None:
        super().__init__("skills.json", base_path)
        self._upgrades_repo = upgrades_repo or UpgradesRepository(base_path=base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, SkillSetDef]:
        upgrades = {upgrade.id: upgrade for upgrade in self._upgrades_repo.all()}
        skill_sets: Dict[str, SkillSetDef] = {}
        for raw_id, payload in raw.items():
            try:
                hero_class = HeroClass(raw_id)
            except ValueError as exc:
                raise DataReferenceError(f"skills reference unknown class '{raw_id}'.") from exc
            context = f"skills for '{raw_id}'"
            data = self._require_mapping(payload, context)
            self._assert_fields(data, {"basic", "ultimate", "passive"}, context)

            basic = self._build_basic(data["basic"], f"{context} basic")
            for category in basic.upgrade_values:
                upgrade = upgrades.get(category)
                if upgrade is None:
                    raise DataReferenceError(
                        f"{context} basic references missing upgrade category '{category}'."
                    )
                if upgrade.category is not category_of(hero_class):
                    raise DataReferenceError(
                        f"{context} basic uses '{category}', which belongs to {upgrade.category.value} classes."
                    )

            skill_sets[raw_id] = SkillSetDef(
                hero_class=hero_class,
                basic=basic,
                ultimate=self._build_ultimate(data["ultimate"], f"{context} ultimate"),
                passive=self._build_passive(data["passive"], f"{context} passive"),
            )
        return skill_sets

    def _build_basic(self, payload: object, context: str) -> BasicSkillDef:
        data = self._require_mapping(payload, context)
        self._assert_fields(data, BASIC_FIELDS, context, optional=BASIC_OPTIONAL)
        ratios = {}
        for key in RATIO_FIELDS:
            value = self._optional_number(data, key, context)
            if value is not None and value > 1:
                raise DataValidationError(f"{context} {key} must be a ratio between 0 and 1.")
            ratios[key] = value or 0.0
        upgrade_data = self._require_mapping(data["upgrade_values"], f"{context} upgrade_values")
        upgrade_values = {
            category: self._require_number(value, f"{context} upgrade_values.{category}")
            for category, value in upgrade_data.items()
        }
        return BasicSkillDef(
            name=self._require_str(data["name"], f"{context} name"),
            description=self._require_str(data["description"], f"{context} description"),
            coefficient=self._require_number(data["coefficient"], f"{context} coefficient"),
            upgrade_values=upgrade_values,
            **ratios,
        )

    def _build_ultimate(self, payload: object, context: str) -> UltimateSkillDef:
        data = self._require_mapping(payload, context)
        self._assert_fields(data, ULTIMATE_FIELDS, context, optional=ULTIMATE_OPTIONAL)
        cooldown = self._require_int(data["cooldown"], f"{context} cooldown")
        initial_cooldown = self._require_int(data["initial_cooldown"], f"{context} initial_cooldown")
        if cooldown < 0 or initial_cooldown < 0:
            raise DataValidationError(f"{context} cooldowns must not be negative.")
        return UltimateSkillDef(
            name=self._require_str(data["name"], f"{context} name"),
            description=self._require_str(data["description"], f"{context} description"),
            cooldown=cooldown,
            initial_cooldown=initial_cooldown,
            base_coefficient=self._require_number(data["base_coefficient"], f"{context} base_coefficient"),
            upgraded_coefficient=self._require_number(
                data["upgraded_coefficient"], f"{context} upgraded_coefficient"
            ),
            special_value=self._optional_number(data, "special_value", context),
            upgraded_special_value=self._optional_number(data, "upgraded_special_value", context),
        )

    def _build_passive(self, payload: object, context: str) -> PassiveSkillDef:
        data = self._require_mapping(payload, context)
        self._assert_fields(data, PASSIVE_FIELDS, context, optional=PASSIVE_OPTIONAL)
        return PassiveSkillDef(
            name=self._require_str(data["name"], f"{context} name"),
            description=self._require_str(data["description"], f"{context} description"),
            value=self._require_number(data["value"], f"{context} value"),
            upgraded_value=self._require_number(data["upgraded_value"], f"{context} upgraded_value"),
            secondary_value=self._optional_number(data, "secondary_value", context),
            upgraded_secondary_value=self._optional_number(data, "upgraded_secondary_value", context),
        )
