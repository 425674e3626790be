from __future__ import annotations

import logging
import os
from pathlib import Path
import stat
from typing import Iterable, Iterator

from picbackup.errors import PathMappingError
from picbackup.extensions import ExtensionClassifier
from picbackup.ignore_engine import IgnoreEngine, build_ignore_engine


def nested_destination(source_root: Path, destination_root: Path | None) -> Path | None:
    """Return the destination's path relative to the source root when it lies inside it."""
    if destination_root is None:
        return None
    source_resolved = source_root.resolve()
    destination_resolved = destination_root.resolve()
    try:
        return destination_resolved.relative_to(source_resolved)
    except ValueError:
        return None


def iter_regular_files(
    source_root: Path,
    ignore_engine: IgnoreEngine | None = None,
    destination_root: Path | None = None,
    logger: logging.Logger | None = None,
) -> Iterator[tuple[Path, int]]:
    """Yield ``(path, size)`` for each regular file under ``source_root``.

    Symlinks are not followed and, like devices, sockets and FIFOs, are not
    yielded. Entries that cannot be visited or stat'ed are logged and skipped.
    A destination tree nested inside the source root is pruned.
    """
    log = logger or logging.getLogger("picbackup.scan")
    engine = ignore_engine or build_ignore_engine()
    pruned = nested_destination(source_root, destination_root)

    if pruned == Path("."):
        log.warning("Source %s is the destination root; not scanning it", source_root)
        return

    def _on_walk_error(exc: OSError) -> None:
        log.error("Error visiting path '%s': %s", exc.filename, exc)

    for root_str, dirs, files in os.walk(source_root, topdown=True, onerror=_on_walk_error):
        root = Path(root_str)
        root_rel = root.relative_to(source_root)

        kept_dirs: list[str] = []
        for dir_name in dirs:
            rel_path = root_rel / dir_name
            if pruned is not None and rel_path == pruned:
                continue
            if engine.is_ignored(rel_path, is_dir=True):
                continue
            kept_dirs.append(dir_name)
        dirs[:] = kept_dirs

        for file_name in files:
            rel_path = root_rel / file_name
            if engine.is_ignored(rel_path):
                continue

            file_path = root / file_name
            try:
                file_stat = os.lstat(file_path)
            except OSError as exc:
                log.error("Error visiting path '%s': %s", file_path, exc)
                continue

            if not stat.S_ISREG(file_stat.st_mode):
                continue
            yield file_path, file_stat.st_size


def calculate_bytes_to_transfer(
    source_roots: Iterable[Path],
    classifier: ExtensionClassifier | None = None,
    ignore_engine: IgnoreEngine | None = None,
    destination_root: Path | None = None,
    logger: logging.Logger | None = None,
) -> int:
    eligible = classifier or ExtensionClassifier()
    bytes_to_transfer = 0
    for source_root in source_roots:
        for file_path, size in iter_regular_files(
            source_root,
            ignore_engine=ignore_engine,
            destination_root=destination_root,
            logger=logger,
        ):
            if eligible.is_eligible(file_path):
                bytes_to_transfer += size
    return bytes_to_transfer


def build_destination_path(source_root: Path, file_path: Path, destination_root: Path) -> Path:
    try:
        relative = Path(file_path).relative_to(source_root)
    except ValueError as exc:
        raise PathMappingError(source_root, file_path) from exc

    if relative == Path(".") or ".." in relative.parts:
        raise PathMappingError(source_root, file_path)
    return destination_root / relative
