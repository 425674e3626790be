import logging

from picbackup.progress import ProgressReporter


def _messages(caplog) -> list[str]:
    return [record.getMessage() for record in caplog.records]


def test_zero_percent_produces_no_output(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"))

    with caplog.at_level(logging.INFO, logger="test.progress"):
        reporter.update(0, 1000)
        reporter.update(50, 1000)

    assert _messages(caplog) == []
    assert reporter.reported_milestones() == []


def test_skipped_milestones_are_backfilled_in_order(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"))

    with caplog.at_level(logging.INFO, logger="test.progress"):
        reporter.update(5, 100)
        reporter.update(47, 100)

    assert _messages(caplog) == [
        "Done 10.00%",
        "Done 20.00%",
        "Done 30.00%",
        "Done 47.00%",
    ]
    assert reporter.reported_milestones() == [1, 2, 3, 4]


def test_each_milestone_is_reported_once(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"))

    with caplog.at_level(logging.INFO, logger="test.progress"):
        reporter.update(12, 100)
        reporter.update(15, 100)
        reporter.update(19, 100)
        reporter.update(25, 100)

    assert _messages(caplog) == ["Done 12.00%", "Done 25.00%"]
    assert reporter.reported_milestones() == [1, 2]


def test_completion_reports_all_bands_up_to_hundred(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"))

    with caplog.at_level(logging.INFO, logger="test.progress"):
        reporter.update(100, 100)
        reporter.update(100, 100)

    messages = _messages(caplog)
    assert messages[0] == "Done 10.00%"
    assert messages[-1] == "Done 100.00%"
    assert len(messages) == 10


def test_overshoot_is_clamped_to_last_milestone(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"))

    with caplog.at_level(logging.INFO, logger="test.progress"):
        reporter.update(150, 100)

    assert _messages(caplog)[-1] == "Done 150.00%"
    assert reporter.reported_milestones() == list(range(1, 11))


def test_non_positive_total_is_ignored(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"))

    with caplog.at_level(logging.INFO, logger="test.progress"):
        reporter.update(10, 0)

    assert _messages(caplog) == []


def test_verbose_logs_exact_percent_at_debug(caplog) -> None:
    reporter = ProgressReporter(logger=logging.getLogger("test.progress"), verbose=True)

    with caplog.at_level(logging.DEBUG, logger="test.progress"):
        reporter.update(1, 4)

    debug_lines = [record.getMessage() for record in caplog.records if record.levelno == logging.DEBUG]
    assert debug_lines == ["Done 25.0%"]
