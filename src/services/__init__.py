"""Service layer for ClipQueue."""

from .clipboard_watcher import ClipboardWatcher
from .context import SyncContext
from .paste_coordinator import PasteAdvanceCoordinator
from .queue_engine import QueueEngine
from .scheduler import Debouncer, ManualScheduler, Scheduler, ThreadScheduler
from .settings import ClipQueueSettings

__all__ = [
    "ClipQueueSettings",
    "ClipboardWatcher",
    "Debouncer",
    "ManualScheduler",
    "PasteAdvanceCoordinator",
    "QueueEngine",
    "Scheduler",
    "SyncContext",
    "ThreadScheduler",
]
