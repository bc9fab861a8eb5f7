"""Abstract interface for blue dollar rate providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from .schemas import Rate


class UpstreamError(Exception):
    """Raised when the upstream provider cannot fulfill a request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BaseRateProvider(ABC):
    """Defines the interface all rate providers must implement."""

    name: str
    display_name: str

    @abstractmethod
    def get_latest(self) -> Rate:
        """Retrieve the most recent blue dollar quote."""

    @abstractmethod
    def get_historical(self, day: date) -> Rate:
        """Retrieve the blue dollar quote for a closed calendar day."""
