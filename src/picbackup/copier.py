from __future__ import annotations

from pathlib import Path

from picbackup.models import CopyResult


CHUNK_SIZE = 1024 * 1024


def copy_file(source_file: Path, destination_file: Path) -> CopyResult:
    """Copy ``source_file`` to ``destination_file``, creating parent directories.

    I/O failures are returned, not raised. ``bytes_copied`` counts what was
    written before a failure, so a result with an error may still carry a
    non-zero count.
    """
    bytes_copied = 0
    try:
        with open(source_file, "rb") as source:
            destination_file.parent.mkdir(parents=True, exist_ok=True)
            with open(destination_file, "wb") as destination:
                for chunk in iter(lambda: source.read(CHUNK_SIZE), b""):
                    destination.write(chunk)
                    bytes_copied += len(chunk)
    except OSError as exc:
        return CopyResult(bytes_copied=bytes_copied, error=exc)
    return CopyResult(bytes_copied=bytes_copied)
