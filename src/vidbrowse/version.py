"""Version management for VidBrowse."""

import tomllib
from pathlib import Path


def get_version() -> str:
    """Get the current version from pyproject.toml."""
    project_root = Path(__file__).parent.parent.parent
    pyproject_path = project_root / "pyproject.toml"

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
            return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        # Fallback version if we can't read it, e.g. when installed from a wheel
        return "0.0.0"


__version__ = get_version()
