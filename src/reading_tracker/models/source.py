"""Source data models for saved items and the feeds they come from."""

import logging
from enum import Enum
from typing import Annotated, Any, Literal
from urllib.parse import urlparse
from uuid import uuid4

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .timestamps import LocalDatetime, local_now

logger = logging.getLogger(__name__)

YOUTUBE_HOSTS = ("youtube.com", "youtu.be")


class LinkSource(BaseModel):
    """A saved web link."""

    type: Literal["link"] = "link"
    url: str
    content: str | None = None  # Extracted page text, when fetched


class TextSource(BaseModel):
    """A pasted text snippet."""

    type: Literal["text"] = "text"
    content: str
    attribution: str | None = None


class DocumentSource(BaseModel):
    """An uploaded document (import not implemented yet)."""

    type: Literal["document"] = "document"
    file_id: str
    file_name: str
    extracted_text: str


SourceData = Annotated[LinkSource | TextSource | DocumentSource, Field(discriminator="type")]

_source_data_adapter: TypeAdapter[LinkSource | TextSource | DocumentSource] = TypeAdapter(SourceData)


class SourceType(str, Enum):
    """Kind of feed a source points at."""

    BLOG = "blog"
    YOUTUBE = "youtube"


class FetchInterval(str, Enum):
    """How often a source is polled."""

    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


class Source(BaseModel):
    """A feed that items can originate from."""

    id: str = Field(default_factory=lambda: str(uuid4())[:8])
    type: SourceType = SourceType.BLOG
    url: str
    name: str
    interval: FetchInterval = FetchInterval.DAILY
    enabled: bool = True
    topic_filter: str | None = None
    auto_tags: list[str] = Field(default_factory=list)
    created_at: LocalDatetime = Field(default_factory=local_now)

    @classmethod
    def from_url(cls, url: str, name: str, **kwargs: Any) -> "Source":
        """Create a source, detecting YouTube channels from the URL."""
        source_type = SourceType.YOUTUBE if is_youtube_url(url) else SourceType.BLOG
        return cls(url=url, name=name, type=source_type, **kwargs)


def parse_source_data(raw: Any) -> LinkSource | TextSource | DocumentSource | None:
    """Decode stored source data.

    Accepts an already-built model, a dict, or a JSON string. Missing or
    malformed data yields None.
    """
    if raw is None or raw == "" or raw == {}:
        return None
    if isinstance(raw, (LinkSource, TextSource, DocumentSource)):
        return raw

    try:
        if isinstance(raw, (str, bytes)):
            return _source_data_adapter.validate_json(raw)
        return _source_data_adapter.validate_python(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed source data: {e.error_count()} error(s)")
        return None


def _hostname(url: str) -> str | None:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    return hostname.replace("www.", "", 1) if hostname else None


def get_domain(url: str | None) -> str:
    """Return a display domain for a URL."""
    if not url:
        return "Manual entry"
    return _hostname(url) or "Link"


def is_youtube_url(url: str | None) -> bool:
    """Check whether a URL points at YouTube."""
    if not url:
        return False
    hostname = _hostname(url)
    if not hostname:
        return False
    return any(host in hostname for host in YOUTUBE_HOSTS)
