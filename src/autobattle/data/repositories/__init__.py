"""Repository exports."""

from .classes_repo import ClassesRepository
from .skills_repo import SkillsRepository
from .stages_repo import StagesRepository
from .upgrades_repo import UpgradesRepository

__all__ = [
    "ClassesRepository",
    "SkillsRepository",
    "StagesRepository",
    "UpgradesRepository",
]
