from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from picbackup.copier import copy_file
from picbackup.errors import NoWorkError, PathMappingError
from picbackup.extensions import ExtensionClassifier
from picbackup.ignore_engine import build_ignore_engine
from picbackup.models import BackupRunOptions, BackupStats
from picbackup.progress import ProgressReporter
from picbackup.scanner import build_destination_path, calculate_bytes_to_transfer, iter_regular_files


def backup_paths(
    source_roots: Sequence[Path],
    destination_root: Path,
    options: BackupRunOptions | None = None,
    classifier: ExtensionClassifier | None = None,
    ignore_patterns: Iterable[str] | None = None,
    logger: logging.Logger | None = None,
) -> BackupStats:
    """Copy every eligible file under ``source_roots`` into ``destination_root``.

    Raises ``NoWorkError`` when there is nothing to transfer. Once copying
    starts, per-file failures are logged and counted in the returned stats.
    """
    log = logger or logging.getLogger("picbackup.backup")
    run_options = options or BackupRunOptions()
    eligible = classifier or ExtensionClassifier()
    ignore_engine = build_ignore_engine(ignore_patterns)

    log.info("Calculating backup size")
    bytes_to_transfer = calculate_bytes_to_transfer(
        source_roots,
        classifier=eligible,
        ignore_engine=ignore_engine,
        destination_root=destination_root,
        logger=log,
    )
    if bytes_to_transfer == 0:
        raise NoWorkError("0 bytes to backup")
    log.info("Backup size: %s bytes", bytes_to_transfer)

    stats = BackupStats(bytes_to_transfer=bytes_to_transfer)
    progress = ProgressReporter(logger=log, verbose=run_options.verbose)

    log.info("Copying files%s", " (dry run)" if run_options.dry_run else "")
    for source_root in source_roots:
        for file_path, size in iter_regular_files(
            source_root,
            ignore_engine=ignore_engine,
            destination_root=destination_root,
            logger=log,
        ):
            if not eligible.is_eligible(file_path):
                stats.skipped += 1
                continue

            try:
                destination_file = build_destination_path(source_root, file_path, destination_root)
            except PathMappingError as exc:
                log.error("Cannot build destination path: %s", exc)
                stats.failed += 1
                continue

            log.debug("Will copy '%s' to '%s'", file_path, destination_file)
            if run_options.dry_run:
                stats.bytes_transferred += size
                stats.copied += 1
            else:
                result = copy_file(file_path, destination_file)
                stats.bytes_transferred += result.bytes_copied
                if result.ok:
                    stats.copied += 1
                else:
                    stats.failed += 1
                    log.error("Copy of '%s' failed: %s", file_path, result.error)

            progress.update(stats.bytes_transferred, bytes_to_transfer)

    log.info("Done backing up files")
    log.info(
        "Backup summary: copied=%s failed=%s skipped=%s bytes=%s/%s",
        stats.copied,
        stats.failed,
        stats.skipped,
        stats.bytes_transferred,
        stats.bytes_to_transfer,
    )
    return stats
