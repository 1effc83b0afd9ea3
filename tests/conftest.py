import sys
from pathlib import Path

import pytest

# Make src importable
REPO_ROOT = Path(__file__).resolve().parent.parent
SRC = REPO_ROOT / "src"
sys.path.insert(0, str(SRC))

from clipboard.memory import MemoryClipboard  # noqa: E402
from services.clipboard_watcher import ClipboardWatcher  # noqa: E402
from services.context import SyncContext  # noqa: E402
from services.paste_coordinator import PasteAdvanceCoordinator  # noqa: E402
from services.queue_engine import QueueEngine  # noqa: E402
from services.scheduler import ManualScheduler  # noqa: E402


@pytest.fixture
def clipboard():
    return MemoryClipboard()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine():
    return QueueEngine()


@pytest.fixture
def context(clipboard, engine):
    return SyncContext(clipboard, engine)


@pytest.fixture
def watcher(context, scheduler):
    return ClipboardWatcher(context, scheduler, poll_interval=0.1, debounce_delay=0.6)


@pytest.fixture
def coordinator(context, watcher, scheduler):
    return PasteAdvanceCoordinator(context, watcher, scheduler)
