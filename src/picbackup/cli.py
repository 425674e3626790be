from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from picbackup.config import load_config
from picbackup.errors import ConfigError, InvalidDirectoryError
from picbackup.input_providers import ConfigInputProvider, InputProvider, InteractiveInputProvider
from picbackup.models import BackupRunOptions
from picbackup.run_service import (
    EXIT_INVALID_CONFIG,
    EXIT_INVALID_DIRECTORY,
    EXIT_RUNTIME_OR_CONFIG_ERROR,
    EXIT_SUCCESS,
    estimate_backup,
    run_backup,
)


LOGGER_NAME = "picbackup"


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--dry-run", action="store_true", help="Walk and report without copying")
    parser.add_argument("--verbose", action="store_true", help="Log every file and progress update")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picbackup",
        description="Back up picture and video files into a mirrored directory tree",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    interactive_parser = subparsers.add_parser(
        "interactive", help="Prompt for destination and source paths, then back up"
    )
    interactive_parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Match extensions case-insensitively (IMG.JPG counts as jpg)",
    )
    _add_logging_arguments(interactive_parser)

    run_parser = subparsers.add_parser("run", help="Back up the paths listed in a config file")
    run_parser.add_argument("--config", required=True, type=Path)
    _add_logging_arguments(run_parser)

    validate_parser = subparsers.add_parser("validate-config", help="Validate config")
    validate_parser.add_argument("--config", required=True, type=Path)

    estimate_parser = subparsers.add_parser(
        "estimate", help="Print how many bytes a run of a config would copy"
    )
    estimate_parser.add_argument("--config", required=True, type=Path)

    return parser


def _configure_logging(verbose: bool, log_file: Path | None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def cmd_validate(config_path: Path) -> int:
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    print(f"Valid config: {config_path} ({len(config.sources)} source(s))")
    print(f"  destination={config.destination}")
    for source in config.sources:
        print(f"  - source={source}")
    print(
        f"  ignoreExtensionCase={str(config.ignore_extension_case).lower()} "
        f"additionalExtensions={len(config.additional_extensions)} "
        f"additionalExcludes={len(config.additional_excludes)} "
        f"dryRun={str(config.dry_run).lower()}"
    )
    return EXIT_SUCCESS


def cmd_estimate(config_path: Path) -> int:
    logger = _configure_logging(verbose=False, log_file=None)
    try:
        request = ConfigInputProvider(config_path).provide()
    except ConfigError as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    bytes_to_transfer = estimate_backup(request, logger=logger.getChild("scan"))
    print(f"Backup size: {bytes_to_transfer} bytes")
    return EXIT_SUCCESS


def cmd_backup(provider: InputProvider, verbose: bool, log_file: Path | None) -> int:
    logger = _configure_logging(verbose=verbose, log_file=log_file)
    exit_code, stats = run_backup(provider, logger=logger.getChild("run"))
    if stats is None:
        return exit_code

    print(
        f"copied={stats.copied} failed={stats.failed} skipped={stats.skipped} "
        f"bytes={stats.bytes_transferred}/{stats.bytes_to_transfer}"
    )
    return exit_code


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "validate-config":
            return cmd_validate(args.config)
        if args.command == "estimate":
            return cmd_estimate(args.config)

        options = BackupRunOptions(dry_run=args.dry_run, verbose=args.verbose)
        if args.command == "interactive":
            provider: InputProvider = InteractiveInputProvider(
                options=options,
                ignore_extension_case=args.ignore_case,
            )
            return cmd_backup(provider, verbose=args.verbose, log_file=args.log_file)
        if args.command == "run":
            provider = ConfigInputProvider(args.config, options=options)
            return cmd_backup(provider, verbose=args.verbose, log_file=args.log_file)
    except InvalidDirectoryError as exc:
        print(f"Fatal: {exc}", file=sys.stderr)
        return EXIT_INVALID_DIRECTORY

    parser.print_help()
    return EXIT_RUNTIME_OR_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
