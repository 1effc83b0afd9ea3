import logging
import time
from typing import Optional

import win32clipboard as wc
import win32con

from clipboard.base import ClipboardPort

logger = logging.getLogger(__name__)


class WindowsClipboard(ClipboardPort):

    open_attempts = 3
    retry_delay = 0.05

    def _open(self) -> bool:
        # another process may hold the clipboard open for a moment
        for _ in range(self.open_attempts):
            try:
                wc.OpenClipboard()
                return True
            except Exception:
                time.sleep(self.retry_delay)
        return False

    def _close(self) -> None:
        try:
            wc.CloseClipboard()
        except Exception:
            pass

    def read_text(self) -> Optional[str]:
        if not self._open():
            return None

        try:
            if not wc.IsClipboardFormatAvailable(win32con.CF_UNICODETEXT):
                return None
            text = wc.GetClipboardData(win32con.CF_UNICODETEXT)
            return text if isinstance(text, str) else None
        except Exception:
            return None
        finally:
            self._close()

    def write_text(self, text: str) -> bool:
        if not self._open():
            logger.warning("Could not open the Windows clipboard for writing")
            return False

        try:
            wc.EmptyClipboard()
            wc.SetClipboardText(text, win32con.CF_UNICODETEXT)
            return True
        except Exception as exc:
            logger.warning("Clipboard write failed: %s", exc)
            return False
        finally:
            self._close()

    def current_generation(self) -> int:
        return int(wc.GetClipboardSequenceNumber())
