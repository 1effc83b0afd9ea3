import logging
from typing import Optional, Sequence

from models import AdvanceOutcome, KeyEvent
from services.clipboard_watcher import ClipboardWatcher
from services.context import SyncContext
from services.scheduler import Scheduler

logger = logging.getLogger(__name__)

DEFAULT_PASTE_DELAY = 0.05
DEFAULT_COPY_CHECK_DELAYS = (0.0, 0.1, 0.3)


class PasteAdvanceCoordinator:
    """Turns paste and copy keystrokes into queue advances and clipboard checks.

    Keyboard hooks fire on their own thread; everything here only schedules
    work so the actual handling happens on the scheduler's timeline.
    """

    def __init__(
        self,
        context: SyncContext,
        watcher: ClipboardWatcher,
        scheduler: Scheduler,
        paste_delay: float = DEFAULT_PASTE_DELAY,
        copy_check_delays: Sequence[float] = DEFAULT_COPY_CHECK_DELAYS,
    ) -> None:
        self.context = context
        self.watcher = watcher
        self.scheduler = scheduler
        self.paste_delay = paste_delay
        self.copy_check_delays = tuple(copy_check_delays)

    def handle_event(self, event: KeyEvent) -> None:
        if event is KeyEvent.PASTE:
            self.on_paste_detected()
        elif event is KeyEvent.COPY_OR_CUT:
            self.on_copy_or_cut_detected()

    def on_paste_detected(self) -> None:
        if not self.context.enabled:
            return
        # let the target application finish reading the clipboard first
        self.scheduler.schedule_once(self.paste_delay, self.advance)

    def on_copy_or_cut_detected(self) -> None:
        if not self.context.enabled:
            return
        # some applications fill the clipboard well after the keystroke
        for delay in self.copy_check_delays:
            self.scheduler.schedule_once(delay, self.watcher.check)

    def advance(self) -> Optional[AdvanceOutcome]:
        context = self.context
        with context.lock:
            if not context.enabled or not context.engine:
                return None

            pasted = context.port.read_text()
            if pasted is None:
                return None

            outcome = context.engine.advance(pasted)
            if outcome.removed is None:
                return outcome
            if not outcome.matched_head:
                logger.debug("Pasted item %s was not at the front", outcome.removed.item_id)
            if outcome.republish:
                context.publish(outcome.head)
            return outcome
