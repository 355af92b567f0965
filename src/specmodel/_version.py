"""Version lookup for the specmodel distribution."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "specmodel"
UNKNOWN_VERSION = "0.0.0"


def _source_tree_version() -> str | None:
    """Read ``[project].version`` when running from a source checkout."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not pyproject.is_file():
        return None
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return None
    value = data.get("project", {}).get("version")
    return value if isinstance(value, str) else None


def get_version() -> str:
    """Installed distribution version, else the checkout's pyproject version."""
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return _source_tree_version() or UNKNOWN_VERSION
