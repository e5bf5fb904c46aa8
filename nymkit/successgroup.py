"""Run tasks concurrently until the first one succeeds.

Every task receives the group's cancellation event. The event is set as
soon as any task finishes without raising, or when ``wait`` returns, so
the remaining tasks can stop early.
"""

from __future__ import annotations

import threading
from typing import Callable

Task = Callable[[threading.Event], object]


class Group:
    """A set of threads working on alternatives to the same task."""

    def __init__(self) -> None:
        self._cancel = threading.Event()
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._errors: list[BaseException] = []
        self._semaphore: threading.Semaphore | None = None
        self._active = 0
        self._succeeded = False

    @property
    def cancel_event(self) -> threading.Event:
        """The event handed to every task."""
        return self._cancel

    def cancelled(self) -> bool:
        """Return whether the group has been cancelled."""
        return self._cancel.is_set()

    def go(self, func: Task) -> None:
        """Run ``func(cancel_event)`` in a new thread.

        Blocks while the group is at its concurrency limit.
        """
        semaphore = self._semaphore
        if semaphore is not None:
            semaphore.acquire()
        with self._lock:
            self._active += 1
        thread = threading.Thread(target=self._run, args=(func, semaphore), daemon=True)
        with self._lock:
            self._threads.append(thread)
        thread.start()

    def _run(self, func: Task, semaphore: threading.Semaphore | None) -> None:
        try:
            func(self._cancel)
        except Exception as exc:  # noqa: BLE001 - every failure is collected
            with self._lock:
                self._errors.append(exc)
        else:
            with self._lock:
                first = not self._succeeded
                self._succeeded = True
            if first:
                self._cancel.set()
        finally:
            with self._lock:
                self._active -= 1
            if semaphore is not None:
                semaphore.release()

    def wait(self) -> list[BaseException]:
        """Wait for every task and return their errors.

        The list is empty when some task succeeded (or the group was
        already cancelled); otherwise it holds every task's exception.
        """
        while True:
            with self._lock:
                pending = [thread for thread in self._threads if thread.is_alive()]
            if not pending:
                break
            for thread in pending:
                thread.join()
        if self._cancel.is_set():
            return []
        self._cancel.set()
        with self._lock:
            return list(self._errors)

    def set_limit(self, n: int) -> None:
        """Allow at most ``n`` tasks at once; a negative ``n`` removes the limit.

        A limit of zero stops any new task from starting.
        """
        if n < 0:
            self._semaphore = None
            return
        with self._lock:
            active = self._active
        if self._semaphore is not None and active:
            raise RuntimeError(
                f"successgroup: modify limit while {active} tasks in the group are still active"
            )
        self._semaphore = threading.Semaphore(n)