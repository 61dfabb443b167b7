"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from .models import ShortLink


class LinkStoreBase(ABC):
    """Persistence contract consumed by the shortener and redirector.

    Implementations own id allocation: ids are positive, monotonically
    increasing, never reused, and allocation is atomic under concurrent
    callers.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Location of the underlying storage
        """
        self.db_config = db_config

    @abstractmethod
    def insert(self, url: str, created_at: Optional[datetime] = None) -> int:
        """Persist a new link.

        Args:
            url: Canonical absolute URL
            created_at: Optional creation timestamp (defaults to now UTC)

        Returns:
            The freshly allocated record id

        Raises:
            StoreError: If the record could not be persisted
        """

    @abstractmethod
    def find_by_id(self, record_id: int) -> Optional[ShortLink]:
        """Look up a link by record id.

        Args:
            record_id: The id returned by :meth:`insert`

        Returns:
            The link, or None if no record has that id
        """

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored links."""

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the store is usable."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying storage handle."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
