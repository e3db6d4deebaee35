"""Populate the process environment from a dotenv file before loading."""

from __future__ import annotations

from pathlib import Path

import structlog
from dotenv import find_dotenv, load_dotenv

logger = structlog.get_logger("config_loadr.core")


def bootstrap_env(path: Path | str | None = None, *, override: bool = False) -> bool:
    """Load variables from ``path`` (or the nearest ``.env``) into ``os.environ``.

    Existing variables win unless ``override`` is set. Returns True when a
    file was found and read.
    """
    if path is None:
        resolved = find_dotenv(usecwd=True)
        if not resolved:
            logger.debug("dotenv-not-found")
            return False
        dotenv_path = Path(resolved)
    else:
        dotenv_path = Path(path)
        if not dotenv_path.is_file():
            logger.debug("dotenv-not-found", path=str(dotenv_path))
            return False

    load_dotenv(dotenv_path=str(dotenv_path), override=override)
    logger.info("dotenv-loaded", path=str(dotenv_path), override=override)
    return True


__all__ = ["bootstrap_env"]
