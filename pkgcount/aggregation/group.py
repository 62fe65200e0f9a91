"""
Fan-out/fan-in over a shared accumulator.

AggregationGroup runs independent units of work on a thread pool. Every unit
receives the same accumulator and mutates it in place (the accumulator must
be safe for that, e.g. a TallyPair). The first unit to fail wins: its error is
kept, the group's CancelScope is cancelled and pending units are dropped.
"""

import logging
import os
import threading
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Generic, TypeVar

from pkgcount.exceptions import AggregationError, RunCancelled

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancelScope:
    """
    Cooperative cancellation signal. A derived scope is cancelled whenever its
    parent is; cancelling a child leaves the parent untouched.
    cancel() only sets an Event, so it may be called from a signal handler.
    """

    def __init__(self, parent: "CancelScope | None" = None) -> None:
        self._parent = parent
        self._event = threading.Event()
        self._cause: BaseException | None = None

    def derive(self) -> "CancelScope":
        return CancelScope(self)

    def cancel(self, cause: BaseException | None = None) -> None:
        if self._event.is_set():
            return
        self._cause = cause
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def cause(self) -> BaseException | None:
        if self._event.is_set():
            return self._cause
        if self._parent is not None:
            return self._parent.cause
        return None

    def check(self) -> None:
        """Raise RunCancelled if this scope has been cancelled."""
        if self.cancelled:
            raise RunCancelled("run cancelled") from self.cause


def default_workers() -> int:
    return os.cpu_count() or 1


class AggregationGroup(Generic[T]):
    """
    Runs units against one accumulator and joins them.

    The accumulator belongs to the group between new() and the return of
    wait(); callers must not touch it in between.
    """

    def __init__(self, scope: CancelScope, initial: T, max_workers: int | None = None) -> None:
        self._scope = scope
        self._acc = initial
        self._max_workers = max_workers or default_workers()
        self._executor: ThreadPoolExecutor | None = None
        self._futures: list[Future] = []
        self._err_lock = threading.Lock()
        self._err: BaseException | None = None
        self._err_label: str | None = None
        self._closed = False

    @classmethod
    def new(
        cls,
        parent: CancelScope | None,
        initial: T,
        max_workers: int | None = None,
    ) -> "tuple[AggregationGroup[T], CancelScope]":
        """Create a group and the scope its units should watch."""
        scope = (parent or CancelScope()).derive()
        return cls(scope, initial, max_workers), scope

    @property
    def scope(self) -> CancelScope:
        return self._scope

    def go(self, unit: Callable[[T], None], label: str | None = None) -> None:
        """
        Schedule one unit. Units scheduled after cancellation never run.
        label identifies the unit in the error raised by wait().
        """
        if self._closed:
            raise RuntimeError("go() called after wait()")
        if self._scope.cancelled:
            return
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="pkgcount-worker",
            )
        self._futures.append(self._executor.submit(self._run, unit, label))

    def _run(self, unit: Callable[[T], None], label: str | None) -> None:
        if self._scope.cancelled:
            return
        try:
            unit(self._acc)
        except RunCancelled as err:
            # unit observed the scope; wait() reports the cancellation itself
            if not self._scope.cancelled:
                self._record(err, label)
        except Exception as err:
            self._record(err, label)

    def _record(self, err: Exception, label: str | None) -> None:
        with self._err_lock:
            if self._err is not None:
                logger.debug("Discarding later failure in %s: %s", label, err)
                return
            self._err = err
            self._err_label = label
        logger.debug("Unit %s failed, cancelling group: %s", label, err)
        self._scope.cancel(err)
        for fut in list(self._futures):
            fut.cancel()

    def wait(self) -> T:
        """
        Block until every scheduled unit has finished or been dropped.
        Returns the accumulator. Raises AggregationError (chained to the first
        failure) or RunCancelled if the scope was cancelled from outside.
        """
        self._closed = True
        if self._executor is None:
            return self._acc
        try:
            futures.wait(self._futures)
        finally:
            self._executor.shutdown(wait=True)

        if self._err is not None:
            label = self._err_label
            message = f"{label}: {self._err}" if label else str(self._err)
            raise AggregationError(message, path=label) from self._err
        if self._scope.cancelled:
            raise RunCancelled("run cancelled before all units completed") from self._scope.cause
        self._scope.cancel()
        return self._acc
