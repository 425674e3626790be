import io
from pathlib import Path

import pytest

from picbackup.errors import InputAbortedError, InvalidDirectoryError
from picbackup.input_providers import ConfigInputProvider, InteractiveInputProvider
from picbackup.models import BackupRequest, BackupRunOptions


def _dirs(tmp_path: Path) -> tuple[Path, Path, Path]:
    destination = tmp_path / "dest"
    first = tmp_path / "first"
    second = tmp_path / "second"
    for path in (destination, first, second):
        path.mkdir()
    return destination, first, second


def test_interactive_reads_destination_and_sources_until_done(tmp_path: Path) -> None:
    destination, first, second = _dirs(tmp_path)
    stdin = io.StringIO(f"{destination}\n{first}\n{second}\ndone\n")
    stdout = io.StringIO()

    request = InteractiveInputProvider(stdin=stdin, stdout=stdout).provide()

    assert request.destination == destination
    assert request.sources == [first, second]
    assert request.requires_confirmation is True
    assert "Enter backup destination path: " in stdout.getvalue()
    assert stdout.getvalue().count("Enter a backup source path or 'done' to finish: ") == 3


def test_interactive_validates_destination_before_asking_for_sources(tmp_path: Path) -> None:
    stdin = io.StringIO(f"{tmp_path / 'missing'}\n")
    stdout = io.StringIO()

    with pytest.raises(InvalidDirectoryError):
        InteractiveInputProvider(stdin=stdin, stdout=stdout).provide()

    assert "source path" not in stdout.getvalue()


def test_interactive_rejects_invalid_source(tmp_path: Path) -> None:
    destination, _, _ = _dirs(tmp_path)
    stdin = io.StringIO(f"{destination}\n{tmp_path / 'nope'}\ndone\n")

    with pytest.raises(InvalidDirectoryError) as excinfo:
        InteractiveInputProvider(stdin=stdin, stdout=io.StringIO()).provide()

    assert excinfo.value.path == tmp_path / "nope"


def test_interactive_end_of_input_aborts(tmp_path: Path) -> None:
    destination, first, _ = _dirs(tmp_path)
    stdin = io.StringIO(f"{destination}\n{first}\n")

    with pytest.raises(InputAbortedError):
        InteractiveInputProvider(stdin=stdin, stdout=io.StringIO()).provide()


def test_interactive_sentinel_must_match_exactly(tmp_path: Path) -> None:
    destination, _, _ = _dirs(tmp_path)
    stdin = io.StringIO(f"{destination}\nDONE\ndone\n")

    with pytest.raises(InvalidDirectoryError):
        InteractiveInputProvider(stdin=stdin, stdout=io.StringIO()).provide()


def test_confirm_prints_summary_and_accepts_only_c(tmp_path: Path) -> None:
    destination, first, second = _dirs(tmp_path)
    request = BackupRequest(destination=destination, sources=[first, second], requires_confirmation=True)

    stdout = io.StringIO()
    accepted = InteractiveInputProvider(stdin=io.StringIO("c\n"), stdout=stdout).confirm(request)
    rejected = InteractiveInputProvider(stdin=io.StringIO("y\n"), stdout=io.StringIO()).confirm(request)
    no_answer = InteractiveInputProvider(stdin=io.StringIO(""), stdout=io.StringIO()).confirm(request)

    assert accepted is True
    assert rejected is False
    assert no_answer is False
    assert stdout.getvalue() == (
        f"Will backup from\n\t{first}\n\t{second}\nTo\n\t{destination}\nEnter 'c' to confirm\n"
    )


def test_config_provider_builds_request_without_confirmation(tmp_path: Path) -> None:
    destination, first, _ = _dirs(tmp_path)
    config_file = tmp_path / "backup.yaml"
    config_file.write_text(
        f"""
destination: {destination.as_posix()}
sources:
  - {first.as_posix()}
ignoreExtensionCase: true
additionalExcludes: [".thumbnails/"]
dryRun: true
""".strip(),
        encoding="utf-8",
    )

    request = ConfigInputProvider(config_file, options=BackupRunOptions(verbose=True)).provide()

    assert request.destination == destination
    assert request.sources == [first]
    assert request.requires_confirmation is False
    assert request.ignore_extension_case is True
    assert request.additional_excludes == [".thumbnails/"]
    assert request.options.dry_run is True
    assert request.options.verbose is True
