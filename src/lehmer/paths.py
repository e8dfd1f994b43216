from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "lehmer"
RUNTIME_DIR_ENV = "LEHMER_RUNTIME_DIR"


def default_runtime_dir() -> Path:
    override = os.environ.get(RUNTIME_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return PlatformDirs(APP_NAME, appauthor=False).user_data_path


__all__ = [
    "APP_NAME",
    "RUNTIME_DIR_ENV",
    "default_runtime_dir",
]
