from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import PlatformDirs

logger = logging.getLogger(__name__)

APP_NAME = "duelarena"

# Environment variable override (useful for tests and power users)
ENV_DATA_DIR = "DUELARENA_DATA_DIR"

STORE_FILENAME = "characters.json"


def data_dir() -> Path:
    """Directory holding the character store, created on demand by the store."""
    override = os.getenv(ENV_DATA_DIR)
    if override:
        return Path(override).expanduser().resolve()
    dirs = PlatformDirs(appname=APP_NAME, appauthor=False)
    return Path(dirs.user_data_dir).expanduser().resolve()


def default_store_path() -> Path:
    path = data_dir() / STORE_FILENAME
    logger.debug("Default character store: %s", path)
    return path
