"""
Abstract interface for all data sources.

A source turns a location (file path or URL) into raw text. Sources never
raise for a failed fetch: the error is carried on the result and the
manager decides what is fatal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class DataLoadError(Exception):
    """One or more source fetches failed; initialization is aborted."""

    def __init__(self, failures: dict):
        self.failures = failures
        detail = '; '.join(f"{loc}: {err}" for loc, err in failures.items())
        super().__init__(f"Failed to load {len(failures)} source(s): {detail}")


@dataclass
class RawTable:
    """Result from fetching one source location."""

    location: str
    text: str = ''
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def is_valid(self) -> bool:
        """Check if data was fetched successfully."""
        return self.error is None


class DataSource(ABC):
    """Abstract base class for data sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this data source."""
        pass

    @abstractmethod
    async def fetch(self, location: str) -> RawTable:
        """
        Fetch the raw text at a location.

        Args:
            location: Path or URL

        Returns:
            RawTable with text, or with error set
        """
        pass

    @abstractmethod
    def supports(self, location: str) -> bool:
        """True if this source can fetch the location."""
        pass
