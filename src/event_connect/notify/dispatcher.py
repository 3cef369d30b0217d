# ABOUTME: Fire-and-forget dispatcher for notification side effects.
# ABOUTME: Runs jobs on a thread pool, logs failures, and never propagates them.

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs best-effort jobs without making the caller wait.

    With ``max_workers=0`` jobs run inline on the calling thread, which is
    what tests and one-shot CLI commands usually want. Failures are logged
    either way.
    """

    def __init__(self, max_workers: int = 2) -> None:
        """Initialize the dispatcher.

        Args:
            max_workers: Size of the background pool; 0 runs jobs inline.
        """
        self._executor = (
            ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")
            if max_workers > 0
            else None
        )

    @property
    def is_inline(self) -> bool:
        """Return True if jobs run on the calling thread."""
        return self._executor is None

    def submit(self, job: Callable[..., Any], *args: Any, **kwargs: Any) -> Future | None:
        """Schedule a job.

        Args:
            job: Callable to run.
            *args: Positional arguments for the job.
            **kwargs: Keyword arguments for the job.

        Returns:
            The job's Future when running in the background, None when inline.
        """
        name = getattr(job, "__qualname__", repr(job))

        if self._executor is None:
            try:
                job(*args, **kwargs)
            except Exception:
                logger.exception("Notification job %s failed", name)
            return None

        future = self._executor.submit(job, *args, **kwargs)
        future.add_done_callback(lambda done: self._log_failure(name, done))
        return future

    @staticmethod
    def _log_failure(name: str, future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error("Notification job %s failed: %s", name, error, exc_info=error)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs and optionally wait for queued ones."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
