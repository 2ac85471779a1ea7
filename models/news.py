"""Data models for news and social posts."""

from dataclasses import dataclass
from typing import Any, Dict

from config import SOCIAL_DOMAINS
from utils.urls import sanitize_url


@dataclass(frozen=True)
class NewsSource:
    """Publisher of a post."""

    title: str
    domain: str


@dataclass(frozen=True)
class NewsItem:
    """A news article or social post."""

    id: int
    title: str
    published_at: str
    url: str
    source: NewsSource
    kind: str = "news"

    @property
    def is_social(self) -> bool:
        return self.kind == "social"

    @property
    def published_date(self) -> str:
        """Return the date portion of the publication timestamp."""
        return self.published_at.split("T")[0]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "published_at": self.published_at,
            "url": self.url,
            "source": {"title": self.source.title, "domain": self.source.domain},
            "kind": self.kind,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "NewsItem":
        """Create a normalized item from a raw CryptoPanic result.

        The link is sanitized and the kind is derived from the source domain.

        Raises:
            KeyError: If ``id`` or ``title`` is missing.
            ValueError: If ``id`` is not numeric.
        """
        source = record.get("source") or {}
        domain = source.get("domain") or ""
        return cls(
            id=int(record["id"]),
            title=record["title"],
            published_at=record.get("published_at") or "",
            url=sanitize_url(record.get("url") or ""),
            source=NewsSource(title=source.get("title") or domain, domain=domain),
            kind=classify_kind(domain),
        )


def classify_kind(domain: str) -> str:
    """Return ``social`` for chat/forum domains, ``news`` otherwise."""
    domain = domain.lower()
    if any(marker in domain for marker in SOCIAL_DOMAINS):
        return "social"
    return "news"
