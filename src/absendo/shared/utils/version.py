"""
Version lookup for the absendo-calendar distribution.
"""

import tomllib
from importlib import metadata
from pathlib import Path
from typing import Any, Dict, Optional

DISTRIBUTION_NAME = "absendo-calendar"


def find_pyproject(start: Optional[Path] = None) -> Optional[Path]:
    """
    Find the pyproject.toml of this project above ``start``.

    Files belonging to other projects (e.g. one containing a virtualenv the
    package is installed into) are skipped.
    """
    start = start or Path(__file__).resolve()

    for parent in start.parents:
        candidate = parent / "pyproject.toml"
        if candidate.exists() and _project_table(candidate).get("name") == DISTRIBUTION_NAME:
            return candidate
    return None


def _project_table(path: Path) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f).get("project", {})


def get_version() -> str:
    """
    Get the project version.

    A source checkout wins over installed metadata, so the value follows
    pyproject.toml without reinstalling. Returns "0.0.0" when neither is
    available.
    """
    pyproject = find_pyproject()
    if pyproject is not None:
        version = _project_table(pyproject).get("version")
        if version:
            return version

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"
