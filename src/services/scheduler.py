"""Timed callback execution for ClipQueue.

Every callback handed to a scheduler runs on one timeline: the
``ThreadScheduler`` owns a single worker thread, the ``ManualScheduler``
runs callbacks from whoever advances its clock. Handlers can therefore
mutate the queue without racing each other.
"""

import functools
import heapq
import itertools
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], object]


class ScheduledHandle:
    """Reference to a pending callback, used for cancellation."""

    __slots__ = ("callback", "due", "interval", "cancelled")

    def __init__(self, callback: Callback, due: float, interval: Optional[float] = None) -> None:
        self.callback = callback
        self.due = due
        self.interval = interval
        self.cancelled = False

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    def __repr__(self) -> str:
        return f"ScheduledHandle(due={self.due:.3f}, interval={self.interval}, cancelled={self.cancelled})"


class Scheduler(ABC):

    @abstractmethod
    def schedule_periodic(self, interval: float, callback: Callback) -> ScheduledHandle:
        pass

    @abstractmethod
    def schedule_once(self, delay: float, callback: Callback) -> ScheduledHandle:
        pass

    def cancel(self, handle: Optional[ScheduledHandle]) -> None:
        if handle is not None:
            handle.cancelled = True

    def call_soon(self, callback: Callback) -> ScheduledHandle:
        return self.schedule_once(0.0, callback)

    @staticmethod
    def _run(handle: ScheduledHandle) -> None:
        try:
            handle.callback()
        except Exception:
            logger.exception("Scheduled callback %r failed", handle.callback)


class _TimerHeap:
    """Due-time ordered handles; ties keep scheduling order."""

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, ScheduledHandle]] = []
        self._counter = itertools.count()

    def push(self, handle: ScheduledHandle) -> None:
        heapq.heappush(self._heap, (handle.due, next(self._counter), handle))

    def peek_due(self) -> Optional[float]:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)
        return self._heap[0][0] if self._heap else None

    def pop_due(self, now: float) -> Optional[ScheduledHandle]:
        due = self.peek_due()
        if due is None or due > now:
            return None
        return heapq.heappop(self._heap)[2]

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return sum(1 for _, _, handle in self._heap if not handle.cancelled)


class ThreadScheduler(Scheduler):
    """Runs all callbacks on one daemon worker thread."""

    def __init__(self, name: str = "clipqueue-scheduler") -> None:
        self._name = name
        self._timers = _TimerHeap()
        self._condition = threading.Condition()
        self._thread: Optional[threading.Thread] = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    def start(self) -> None:
        with self._condition:
            if self._is_running:
                logger.debug("Scheduler already running")
                return
            self._is_running = True
            self._thread = threading.Thread(target=self._loop, name=self._name, daemon=True)
            self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        with self._condition:
            if not self._is_running:
                return
            self._is_running = False
            self._timers.clear()
            self._condition.notify_all()

        # join outside the lock
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)
        self._thread = None

    def schedule_periodic(self, interval: float, callback: Callback) -> ScheduledHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        return self._push(ScheduledHandle(callback, time.monotonic() + interval, interval))

    def schedule_once(self, delay: float, callback: Callback) -> ScheduledHandle:
        return self._push(ScheduledHandle(callback, time.monotonic() + max(delay, 0.0)))

    def cancel(self, handle: Optional[ScheduledHandle]) -> None:
        super().cancel(handle)
        with self._condition:
            self._condition.notify_all()

    def _push(self, handle: ScheduledHandle) -> ScheduledHandle:
        with self._condition:
            self._timers.push(handle)
            self._condition.notify_all()
        return handle

    def _loop(self) -> None:
        while True:
            with self._condition:
                handle = None
                while self._is_running:
                    now = time.monotonic()
                    handle = self._timers.pop_due(now)
                    if handle is not None:
                        break
                    due = self._timers.peek_due()
                    self._condition.wait(timeout=None if due is None else due - now)
                if not self._is_running:
                    return
                if handle.periodic:
                    handle.due = max(handle.due + handle.interval, time.monotonic())
                    self._timers.push(handle)

            self._run(handle)

    def __enter__(self) -> "ThreadScheduler":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


class ManualScheduler(Scheduler):
    """Scheduler driven by a virtual clock.

    Nothing runs until ``advance`` or ``run_pending`` is called; callbacks
    then fire in due order, including ones scheduled while advancing.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._timers = _TimerHeap()

    def schedule_periodic(self, interval: float, callback: Callback) -> ScheduledHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        handle = ScheduledHandle(callback, self.now + interval, interval)
        self._timers.push(handle)
        return handle

    def schedule_once(self, delay: float, callback: Callback) -> ScheduledHandle:
        handle = ScheduledHandle(callback, self.now + max(delay, 0.0))
        self._timers.push(handle)
        return handle

    @property
    def pending(self) -> int:
        return len(self._timers)

    def run_pending(self) -> int:
        return self.advance(0.0)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, returning how many callbacks ran."""
        target = self.now + seconds
        ran = 0
        while True:
            handle = self._timers.pop_due(target)
            if handle is None:
                break
            self.now = max(self.now, handle.due)
            if handle.periodic:
                handle.due += handle.interval
                self._timers.push(handle)
            self._run(handle)
            ran += 1
        self.now = target
        return ran


class Debouncer:
    """Restartable one-shot timer: each ``trigger`` pushes the deadline back."""

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callback) -> None:
        self._scheduler = scheduler
        self.delay = delay
        self._callback = callback
        self._handle: Optional[ScheduledHandle] = None
        self._token: Optional[object] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        handle = self._handle
        return handle is not None and not handle.cancelled

    def trigger(self) -> None:
        with self._lock:
            self._scheduler.cancel(self._handle)
            token = object()
            self._token = token
            self._handle = self._scheduler.schedule_once(self.delay, functools.partial(self._fire, token))

    def cancel(self) -> None:
        with self._lock:
            self._scheduler.cancel(self._handle)
            self._handle = None
            self._token = None

    def _fire(self, token: object) -> None:
        # a timer popped just before being re-armed must not fire
        with self._lock:
            if token is not self._token:
                return
            self._handle = None
            self._token = None
        self._callback()
