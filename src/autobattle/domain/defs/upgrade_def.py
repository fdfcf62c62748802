"""Upgrade category definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from autobattle.domain.classes import Category


@dataclass(frozen=True, slots=True)
class UpgradeCategoryDef:
    """Metadata and investment cap for one upgrade category."""

    id: str
    name: str
    max_points: int
    category: Category
    description: str
