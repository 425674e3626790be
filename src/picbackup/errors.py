from __future__ import annotations

from pathlib import Path


class BackupError(Exception):
    """Base class for errors that stop or skip part of a backup run."""


class NoWorkError(BackupError):
    pass


class PathMappingError(BackupError):
    def __init__(self, source_root: Path, file_path: Path) -> None:
        super().__init__(f"Cannot map '{file_path}' relative to source root '{source_root}'")
        self.source_root = source_root
        self.file_path = file_path


class InputAbortedError(BackupError):
    pass


class ConfigError(ValueError):
    pass


# Not a BackupError: startup validation failures halt the process.
class InvalidDirectoryError(Exception):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid directory '{path}': {reason}")
        self.path = path
        self.reason = reason
