from __future__ import annotations

import logging


class ProgressReporter:
    """Logs a line each time cumulative progress crosses a new milestone.

    With the default ten steps, milestones are the 10% bands. Milestone 0 is
    never reported. A call that jumps over several bands first logs the
    skipped ones in ascending order. Each milestone is logged at most once
    per reporter, so a new run should use a new reporter.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        steps: int = 10,
        verbose: bool = False,
    ) -> None:
        if steps < 1:
            raise ValueError("steps must be at least 1")
        self._log = logger or logging.getLogger("picbackup.progress")
        self._steps = steps
        self._verbose = verbose
        self._reported = [False] * (steps + 1)

    @property
    def percent_per_step(self) -> float:
        return 100.0 / self._steps

    def reported_milestones(self) -> list[int]:
        return [index for index, done in enumerate(self._reported) if done]

    def update(self, done: int, total: int) -> None:
        if total <= 0:
            return

        percent_done = done / total * 100
        if self._verbose:
            self._log.debug("Done %s%%", percent_done)

        milestone = int(percent_done // self.percent_per_step)
        milestone = min(max(milestone, 0), self._steps)
        if milestone == 0 or self._reported[milestone]:
            return

        for index in range(1, milestone):
            if not self._reported[index]:
                self._log.info("Done %.2f%%", index * self.percent_per_step)
                self._reported[index] = True

        self._log.info("Done %.2f%%", percent_done)
        self._reported[milestone] = True
