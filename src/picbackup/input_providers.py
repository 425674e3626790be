from __future__ import annotations

from pathlib import Path
import sys
from typing import TextIO

from picbackup.config import load_config
from picbackup.errors import InputAbortedError
from picbackup.models import BackupRequest, BackupRunOptions
from picbackup.validation import ensure_valid_dirs


DONE_SENTINEL = "done"
CONFIRM_TOKEN = "c"


class InputProvider:
    """Supplies the destination and source roots for one backup run."""

    def provide(self) -> BackupRequest:
        raise NotImplementedError

    def confirm(self, request: BackupRequest) -> bool:
        return True


class InteractiveInputProvider(InputProvider):
    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        options: BackupRunOptions | None = None,
        ignore_extension_case: bool = False,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._options = options or BackupRunOptions()
        self._ignore_extension_case = ignore_extension_case

    def _prompt(self, message: str) -> str:
        print(message, file=self._stdout, flush=True)
        line = self._stdin.readline()
        if not line:
            raise InputAbortedError("Input ended before entry was complete")
        return line.rstrip("\r\n")

    def provide(self) -> BackupRequest:
        destination = Path(self._prompt("Enter backup destination path: "))
        ensure_valid_dirs(destination)

        sources: list[Path] = []
        while True:
            line = self._prompt(f"Enter a backup source path or '{DONE_SENTINEL}' to finish: ")
            if line == DONE_SENTINEL:
                break
            sources.append(Path(line))
        ensure_valid_dirs(*sources)

        return BackupRequest(
            destination=destination,
            sources=sources,
            requires_confirmation=True,
            options=self._options,
            ignore_extension_case=self._ignore_extension_case,
        )

    def confirm(self, request: BackupRequest) -> bool:
        print("Will backup from", file=self._stdout)
        for source in request.sources:
            print(f"\t{source}", file=self._stdout)
        print("To", file=self._stdout)
        print(f"\t{request.destination}", file=self._stdout)

        print(f"Enter '{CONFIRM_TOKEN}' to confirm", file=self._stdout, flush=True)
        answer = self._stdin.readline()
        return answer.strip() == CONFIRM_TOKEN


class ConfigInputProvider(InputProvider):
    def __init__(self, config_path: Path, options: BackupRunOptions | None = None) -> None:
        self.config_path = config_path
        self._options = options

    def provide(self) -> BackupRequest:
        config = load_config(self.config_path)
        options = self._options or BackupRunOptions()
        return BackupRequest(
            destination=config.destination,
            sources=config.sources,
            requires_confirmation=False,
            options=BackupRunOptions(
                dry_run=options.dry_run or config.dry_run,
                verbose=options.verbose,
            ),
            ignore_extension_case=config.ignore_extension_case,
            additional_extensions=config.additional_extensions,
            additional_excludes=config.additional_excludes,
        )
