from __future__ import annotations

import importlib.metadata

FALLBACK_VERSION = "0.1.0"


def get_version() -> str:
    """Installed distribution version, or the source tree's version."""
    try:
        return importlib.metadata.version("glyphpad")
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def get_version_string() -> str:
    return f"glyphpad {get_version()}"
