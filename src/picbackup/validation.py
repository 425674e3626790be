from __future__ import annotations

import os
from pathlib import Path
import stat

from picbackup.errors import InvalidDirectoryError


def ensure_valid_dirs(*dir_paths: Path) -> None:
    """Raise ``InvalidDirectoryError`` for the first path that is not an existing directory."""
    for dir_path in dir_paths:
        try:
            dir_stat = os.stat(dir_path)
        except OSError as exc:
            raise InvalidDirectoryError(Path(dir_path), f"cannot stat: {exc}") from exc

        if not stat.S_ISDIR(dir_stat.st_mode):
            raise InvalidDirectoryError(Path(dir_path), "expected a directory")
