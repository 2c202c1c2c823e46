"""Fixed-interval scheduler for Home Run Bot."""

import threading
from collections.abc import Callable
from typing import Any

from .logging_config import create_execution_logger


class Scheduler:
    """Runs a task repeatedly with a fixed pause between runs.

    Runs never overlap: the pause starts once a run has returned. `stop()`
    cuts the current pause short and ends the loop after the run in progress.
    """

    def __init__(
        self,
        task: Callable[[], Any],
        interval_seconds: float,
        wait: Callable[[float], bool] | None = None,
        execution_id: str | None = None,
    ):
        """Initialize the scheduler.

        Args:
            task: Callable run once per cycle
            interval_seconds: Pause between the end of one run and the next
            wait: Called with the pause length; returns True to stop the loop.
                Defaults to waiting on the stop event.
            execution_id: Execution ID for logging context
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.task = task
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._wait = wait or self._stop_event.wait
        self.cycles_run = 0
        self.logger = create_execution_logger("scheduler", execution_id)

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Ask the loop to finish; interrupts a pause in progress.

        Only sets an event, so it is safe to call from a signal handler.
        """
        self._stop_event.set()

    def run(self, max_cycles: int | None = None) -> int:
        """Run the task until stopped.

        Args:
            max_cycles: Stop after this many runs (None runs forever)

        Returns:
            Number of runs completed
        """
        self.logger.log_execution_start(
            interval_seconds=self.interval_seconds, max_cycles=max_cycles
        )

        while not self.stopped:
            self.task()
            self.cycles_run += 1

            if max_cycles is not None and self.cycles_run >= max_cycles:
                break
            if self.stopped:
                break

            self.logger.debug(
                f"Sleeping {self.interval_seconds} seconds until next cycle",
                interval_seconds=self.interval_seconds,
            )
            if self._wait(self.interval_seconds):
                break

        if self.stopped:
            self.logger.info("Stop requested", cycles_run=self.cycles_run)
        self.logger.log_execution_end(success=True, cycles_run=self.cycles_run)
        return self.cycles_run
