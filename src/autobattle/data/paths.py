"""Helpers for resolving definition file locations."""
from __future__ import annotations

import os
from pathlib import Path

DEFINITIONS_ENV_VAR = "AUTOBATTLE_DEFINITIONS_PATH"


def get_package_definitions_path() -> Path:
    """Return the definitions directory shipped inside the package."""
    return Path(__file__).resolve().parent / "definitions"


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing JSON definition files.

    An explicit ``base_path`` wins, then the AUTOBATTLE_DEFINITIONS_PATH
    environment variable, then the packaged definitions.
    """
    if base_path is not None:
        return Path(base_path)
    override = os.getenv(DEFINITIONS_ENV_VAR)
    if override:
        return Path(override)
    return get_package_definitions_path()
