from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class BackupRunOptions:
    dry_run: bool = False
    verbose: bool = False


@dataclass(slots=True)
class CopyResult:
    bytes_copied: int = 0
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class BackupStats:
    bytes_to_transfer: int = 0
    bytes_transferred: int = 0
    copied: int = 0
    skipped: int = 0
    failed: int = 0


@dataclass(slots=True)
class BackupRequest:
    destination: Path
    sources: list[Path]
    requires_confirmation: bool = False
    options: BackupRunOptions = field(default_factory=BackupRunOptions)
    ignore_extension_case: bool = False
    additional_extensions: list[str] = field(default_factory=list)
    additional_excludes: list[str] = field(default_factory=list)
