from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "wrytr"
DEV_VERSION = "dev"


def get_display_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return DEV_VERSION


def get_app_title_base() -> str:
    return f"Wrytr {get_display_version()}"
