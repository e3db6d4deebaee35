"""Version information for config-loadr."""

import importlib.metadata


def get_version() -> str:
    """Return the installed config-loadr version."""
    try:
        return importlib.metadata.version("config-loadr")
    except importlib.metadata.PackageNotFoundError:
        # Fallback for development/uninstalled package
        return "0.1.0-dev"
