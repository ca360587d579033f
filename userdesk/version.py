from importlib import metadata
from pathlib import Path

import tomli as tomllib


def get_version() -> str:
    """
    Get the userdesk version.

    Prefers the installed distribution metadata and falls back to the
    pyproject.toml of a source checkout.

    Returns:
        Version string, or "unknown" if not found
    """
    try:
        return metadata.version("userdesk")
    except metadata.PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    if not pyproject_path.exists():
        return "unknown"

    with open(pyproject_path, "rb") as f:
        pyproject = tomllib.load(f)
        return pyproject.get("project", {}).get("version", "unknown")
