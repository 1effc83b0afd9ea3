from abc import ABC, abstractmethod
from typing import Optional


class ClipboardPort(ABC):
    """Text view of the system clipboard plus its change counter.

    ``current_generation`` must return a new value after every write made
    by any process, including writes made through this port.
    """

    @abstractmethod
    def read_text(self) -> Optional[str]:
        pass

    @abstractmethod
    def write_text(self, text: str) -> bool:
        pass

    @abstractmethod
    def current_generation(self) -> int:
        pass

    @property
    def name(self) -> str:
        return type(self).__name__
