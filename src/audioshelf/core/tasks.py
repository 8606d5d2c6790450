# ABOUTME: Task-execution collaborator that runs units of work off the calling thread.
# ABOUTME: TaskRunner protocol plus a single-worker thread pool implementation.

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol, runtime_checkable


@runtime_checkable
class TaskRunner(Protocol):
    """Protocol for schedulers that run a no-argument callable exactly once, off-thread."""

    def submit(self, fn: Callable[[], None]) -> Future: ...

    def shutdown(self, wait: bool = True) -> None: ...


class ThreadTaskRunner:
    """Runs submitted work on one background thread, in submission order."""

    def __init__(self, name: str = "audioshelf-worker") -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, fn: Callable[[], None]) -> Future:
        """Schedule fn and return a Future for its completion."""
        return self._executor.submit(fn)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for pending work to finish."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ThreadTaskRunner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)
