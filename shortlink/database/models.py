"""Data models for shortlink."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..codec import encode


@dataclass(frozen=True)
class ShortLink:
    """A stored link: store-assigned id and the canonical target URL."""

    id: int
    url: str
    created_at: Optional[datetime] = None

    @property
    def chunk(self) -> str:
        """URL-safe chunk that identifies this link."""
        return encode(self.id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "chunk": self.chunk,
            "url": self.url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row) -> "ShortLink":
        """Create from a ``(id, url, created_at)`` database row."""
        created_at = row[2]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(id=row[0], url=row[1], created_at=created_at)
