from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as metadata_version
from pathlib import Path

import tomli as tomllib

DISTRIBUTION = "userapi"
PYPROJECT = Path(__file__).parent.parent / "pyproject.toml"


def _version_from_pyproject(pyproject_path: Path) -> str:
    if not pyproject_path.exists():
        return "unknown"

    with open(pyproject_path, "rb") as f:
        return tomllib.load(f).get("project", {}).get("version", "unknown")


def get_version() -> str:
    """
    Version of the installed userapi distribution.

    Source checkouts that were never installed fall back to the version
    declared in pyproject.toml, then to "unknown".
    """
    try:
        return metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return _version_from_pyproject(PYPROJECT)
