"""Domain definition exports."""

from .class_def import ClassDef
from .skill_def import BasicSkillDef, PassiveSkillDef, SkillSetDef, UltimateSkillDef
from .stage_def import StageDef
from .upgrade_def import UpgradeCategoryDef

__all__ = [
    "BasicSkillDef",
    "ClassDef",
    "PassiveSkillDef",
    "SkillSetDef",
    "StageDef",
    "UltimateSkillDef",
    "UpgradeCategoryDef",
]
