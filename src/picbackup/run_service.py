from __future__ import annotations

import logging

from picbackup.backup_engine import backup_paths
from picbackup.errors import ConfigError, InputAbortedError, NoWorkError
from picbackup.extensions import ExtensionClassifier
from picbackup.ignore_engine import build_ignore_engine
from picbackup.input_providers import InputProvider
from picbackup.models import BackupRequest, BackupStats
from picbackup.scanner import calculate_bytes_to_transfer
from picbackup.validation import ensure_valid_dirs


EXIT_SUCCESS = 0
EXIT_RUNTIME_OR_CONFIG_ERROR = 1
EXIT_PARTIAL_FAILURES = 2
EXIT_INVALID_CONFIG = 3
EXIT_ABORTED = 4
EXIT_INVALID_DIRECTORY = 5


def build_classifier(request: BackupRequest) -> ExtensionClassifier:
    return ExtensionClassifier(
        extra_extensions=request.additional_extensions,
        ignore_case=request.ignore_extension_case,
    )


def estimate_backup(request: BackupRequest, logger: logging.Logger | None = None) -> int:
    """Validate the request's directories and return the bytes a run would transfer."""
    ensure_valid_dirs(request.destination, *request.sources)
    return calculate_bytes_to_transfer(
        request.sources,
        classifier=build_classifier(request),
        ignore_engine=build_ignore_engine(request.additional_excludes),
        destination_root=request.destination,
        logger=logger,
    )


def run_backup(
    provider: InputProvider,
    logger: logging.Logger | None = None,
) -> tuple[int, BackupStats | None]:
    """Run one backup from ``provider``.

    ``InvalidDirectoryError`` is not handled here: callers are expected to
    halt on it.
    """
    log = logger or logging.getLogger("picbackup.run")

    try:
        request = provider.provide()
    except ConfigError as exc:
        log.error("Invalid config: %s", exc)
        return EXIT_INVALID_CONFIG, None
    except InputAbortedError as exc:
        log.error("%s", exc)
        return EXIT_ABORTED, None

    ensure_valid_dirs(request.destination, *request.sources)

    if request.requires_confirmation and not provider.confirm(request):
        log.warning("Must confirm to continue")
        return EXIT_ABORTED, None

    log.info(
        "Backup started: destination=%s sources=%s dryRun=%s",
        request.destination,
        len(request.sources),
        request.options.dry_run,
    )
    try:
        stats = backup_paths(
            request.sources,
            request.destination,
            options=request.options,
            classifier=build_classifier(request),
            ignore_patterns=request.additional_excludes,
            logger=log,
        )
    except NoWorkError as exc:
        log.error("Backup failed: %s", exc)
        return EXIT_RUNTIME_OR_CONFIG_ERROR, None

    exit_code = EXIT_PARTIAL_FAILURES if stats.failed else EXIT_SUCCESS
    return exit_code, stats
