"""Installed distribution version."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "palette-machine"


def get_version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
