#!/usr/bin/env python3

from clipboard import get_clipboard_port
from models import OrderingMode, QueueSnapshot
from services.clipboard_watcher import ClipboardWatcher
from services.context import SyncContext
from services.paste_coordinator import PasteAdvanceCoordinator
from services.queue_engine import QueueEngine
from services.scheduler import ThreadScheduler
from services.settings import ClipQueueSettings
import argparse
import logging
import signal
import sys
import time
from typing import Callable, Optional

from pydantic import ValidationError


logger = logging.getLogger(__name__)


class ClipQueueApp:

    def __init__(self, settings: Optional[ClipQueueSettings] = None):
        self.settings = settings or ClipQueueSettings()
        self.scheduler: Optional[ThreadScheduler] = None
        self.context: Optional[SyncContext] = None
        self.watcher: Optional[ClipboardWatcher] = None
        self.coordinator: Optional[PasteAdvanceCoordinator] = None
        self.keyboard_listener = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.running = False

    def _on_queue_change(self, snapshot: QueueSnapshot):
        head = snapshot.head
        if head is None:
            logger.info(f"[{snapshot.mode.value.upper()}] queue empty")
        else:
            logger.info(
                f"[{snapshot.mode.value.upper()}] {len(snapshot)} queued, next: {head.preview(30)!r}")

    def _start_keyboard(self):
        from services.keyboard_listener import KeyboardListener

        self.keyboard_listener = KeyboardListener(
            on_event=self.coordinator.handle_event,
            on_toggle=self.context.toggle_enabled,
            toggle_hotkey=self.settings.toggle_hotkey,
        )
        if not self.keyboard_listener.start():
            logger.warning("Continuing without keyboard-driven advance")
            self.keyboard_listener = None

    def start(self):
        if self.running:
            return

        settings = self.settings
        port = get_clipboard_port(settings.backend)
        logger.info(f"Using clipboard backend: {port.name}")

        self.scheduler = ThreadScheduler()
        self.context = SyncContext(port, QueueEngine(settings.ordering_mode))
        self._unsubscribe = self.context.engine.subscribe(self._on_queue_change)

        self.watcher = ClipboardWatcher(
            self.context,
            self.scheduler,
            poll_interval=settings.poll_interval,
            debounce_delay=settings.debounce_delay,
        )
        self.coordinator = PasteAdvanceCoordinator(
            self.context,
            self.watcher,
            self.scheduler,
            paste_delay=settings.paste_delay,
            copy_check_delays=settings.copy_check_delays,
        )

        self.running = True
        self.scheduler.start()
        self.watcher.start()

        if settings.keyboard_enabled:
            self._start_keyboard()

        print(
            f"ClipQueue running ({settings.ordering_mode.value.upper()}). Press Ctrl+C to stop")

    def stop(self):
        if not self.running:
            return

        self.running = False

        if self.keyboard_listener:
            self.keyboard_listener.stop()
            self.keyboard_listener = None

        if self.watcher:
            self.watcher.stop()

        if self.scheduler:
            self.scheduler.stop()

        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

        print("ClipQueue stopped")

    def run_forever(self):
        self.start()

        try:
            while self.running:
                time.sleep(1.0)
        except KeyboardInterrupt:
            print("\nStopping...")
        finally:
            self.stop()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="ClipQueue - copy several snippets, paste them back in order"
    )

    parser.add_argument(
        "-i", "--poll-interval",
        type=float,
        default=None,
        help="Clipboard polling interval in seconds (default: 0.1)"
    )

    parser.add_argument(
        "--debounce",
        type=float,
        default=None,
        help="Quiet period before the next item is loaded, in seconds (default: 0.6)"
    )

    parser.add_argument(
        "-m", "--mode",
        choices=[mode.value for mode in OrderingMode],
        default=None,
        help="Queue ordering: fifo pastes oldest first, lifo newest first (default: fifo)"
    )

    parser.add_argument(
        "-b", "--backend",
        type=str,
        default=None,
        help="Clipboard backend: auto, memory, windows, macos or linux (default: auto)"
    )

    parser.add_argument(
        "--toggle-hotkey",
        type=str,
        default=None,
        help="Hotkey that pauses/resumes the queue, empty to disable (default: ctrl+alt+c)"
    )

    parser.add_argument(
        "--no-keyboard",
        action="store_true",
        help="Do not install keyboard hooks; rely on clipboard polling only"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose debug logging"
    )

    return parser.parse_args(argv)


def load_settings(args) -> ClipQueueSettings:
    return ClipQueueSettings.from_env(
        poll_interval=args.poll_interval,
        debounce_delay=args.debounce,
        ordering_mode=args.mode,
        backend=args.backend,
        toggle_hotkey=args.toggle_hotkey,
        keyboard_enabled=False if args.no_keyboard else None,
        log_level="DEBUG" if args.verbose else None,
    )


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    try:
        settings = load_settings(args)
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        sys.exit(2)

    logging.getLogger().setLevel(settings.log_level)

    app = ClipQueueApp(settings)

    def signal_handler(signum, frame):
        app.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        app.run_forever()
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
