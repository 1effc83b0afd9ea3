import hashlib
import logging
import os
import shutil
import subprocess
import threading
from typing import List, Optional

from clipboard.base import ClipboardPort

logger = logging.getLogger(__name__)


class LinuxClipboard(ClipboardPort):
    """Clipboard access through ``wl-paste``/``wl-copy`` or ``xclip``.

    Neither X11 nor Wayland tools expose a change counter, so one is derived:
    every time text is read back that hashes differently from the last known
    digest, or this port writes, the generation is bumped. Failed reads and
    non-text content both make xclip/wl-paste exit non-zero, so neither moves
    the generation.
    """

    read_timeout = 1.5
    write_timeout = 2.0

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._last_digest: Optional[str] = None
        self._last_digest = self._digest(self.read_text())

    @staticmethod
    def _wayland() -> bool:
        return bool(os.environ.get("WAYLAND_DISPLAY")) and shutil.which("wl-paste") is not None

    @staticmethod
    def _digest(text: Optional[str]) -> Optional[str]:
        if text is None:
            return None
        return hashlib.md5(text.encode("utf-8")).hexdigest()

    def _read_command(self) -> Optional[List[str]]:
        if self._wayland():
            return ["wl-paste", "--no-newline", "--type", "text/plain"]
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard", "-o"]
        return None

    def _write_command(self) -> Optional[List[str]]:
        if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
            return ["wl-copy"]
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard"]
        return None

    def read_text(self) -> Optional[str]:
        command = self._read_command()
        if command is None:
            return None
        data = self._run_command(command, timeout=self.read_timeout)
        if data is None:
            return None
        return data.decode("utf-8", errors="ignore")

    def write_text(self, text: str) -> bool:
        command = self._write_command()
        if command is None:
            logger.warning("Neither wl-copy nor xclip is available")
            return False

        try:
            subprocess.run(
                command,
                input=text.encode("utf-8"),
                check=True,
                timeout=self.write_timeout,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError) as exc:
            logger.warning("Clipboard write failed: %s", exc)
            return False

        with self._lock:
            self._generation += 1
            self._last_digest = self._digest(text)
        return True

    def current_generation(self) -> int:
        # a failed or non-text read says nothing about a change
        digest = self._digest(self.read_text())
        with self._lock:
            if digest is not None and digest != self._last_digest:
                self._last_digest = digest
                self._generation += 1
            return self._generation

    def _run_command(self, command: List[str], timeout: float) -> Optional[bytes]:
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=True,
                timeout=timeout,
            )
            return result.stdout
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, FileNotFoundError):
            return None
