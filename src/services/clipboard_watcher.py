"""Clipboard polling for ClipQueue.

The watcher compares the clipboard generation against the context baseline
on a short period, captures new text into the queue and, once copying has
settled for ``debounce_delay`` seconds, loads the next item back into the
clipboard.
"""

import logging
from typing import Optional

from models import ClipItem
from services.context import SyncContext
from services.scheduler import Debouncer, ScheduledHandle, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1
DEFAULT_DEBOUNCE_DELAY = 0.6


class ClipboardWatcher:

    def __init__(
        self,
        context: SyncContext,
        scheduler: Scheduler,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
    ) -> None:
        self.context = context
        self.scheduler = scheduler
        self.poll_interval = poll_interval
        self._refill = Debouncer(scheduler, debounce_delay, self.refill)
        self._poll_handle: Optional[ScheduledHandle] = None

    @property
    def is_running(self) -> bool:
        return self._poll_handle is not None

    @property
    def refill_pending(self) -> bool:
        return self._refill.pending

    def start(self) -> None:
        if self._poll_handle is not None:
            logger.debug("ClipboardWatcher already running")
            return
        logger.info("Starting clipboard polling (interval=%ss)", self.poll_interval)
        self._poll_handle = self.scheduler.schedule_periodic(self.poll_interval, self.check)

    def stop(self) -> None:
        if self._poll_handle is None:
            return
        logger.info("Stopping clipboard polling")
        self.scheduler.cancel(self._poll_handle)
        self._poll_handle = None
        self._refill.cancel()

    def check(self) -> Optional[ClipItem]:
        """Capture the clipboard text if another application changed it."""
        context = self.context
        with context.lock:
            if not context.enabled:
                return None

            generation = context.port.current_generation()
            if generation == context.baseline:
                return None
            # move the baseline first so the same change is never seen twice
            context.baseline = generation

            text = context.port.read_text()
            if text is None:
                logger.debug("Clipboard changed to non-text content, ignoring")
                return None

            item = context.engine.insert(text)
            if item is not None:
                self._refill.trigger()
            return item

    def refill(self) -> bool:
        """Load the queue head into the clipboard unless it is already there."""
        context = self.context
        with context.lock:
            if not context.enabled:
                return False

            head = context.engine.head
            if head is None:
                return False
            if context.port.read_text() == head.content:
                logger.debug("Clipboard already holds the next item")
                return False

            logger.info("Loading next item [%s...]", head.preview())
            return context.publish(head)
