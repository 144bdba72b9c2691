"""Abstract logger interface.

Implementations accept a message plus arbitrary keyword arguments that are
attached to the record as structured fields.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Drop-in logging interface used across exprcalc."""

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def get_session_id(self) -> str:
        """Identifier shared by every record emitted by this logger."""
        pass
