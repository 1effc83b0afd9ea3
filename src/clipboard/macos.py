import logging
from typing import Optional

from AppKit import NSPasteboard, NSPasteboardTypeString

from clipboard.base import ClipboardPort

logger = logging.getLogger(__name__)


class MacOSClipboard(ClipboardPort):

    def __init__(self) -> None:
        self._pasteboard = NSPasteboard.generalPasteboard()

    def read_text(self) -> Optional[str]:
        try:
            text = self._pasteboard.stringForType_(NSPasteboardTypeString)
        except Exception:
            return None
        return str(text) if text is not None else None

    def write_text(self, text: str) -> bool:
        try:
            self._pasteboard.clearContents()
            return bool(self._pasteboard.setString_forType_(text, NSPasteboardTypeString))
        except Exception as exc:
            logger.warning("Pasteboard write failed: %s", exc)
            return False

    def current_generation(self) -> int:
        return int(self._pasteboard.changeCount())
