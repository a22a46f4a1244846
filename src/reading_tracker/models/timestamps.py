"""Timestamp normalization.

Stored timestamps are naive and in local time: the configured zone when
``settings.timezone`` is set, the system zone otherwise. Aware values from
storage are converted on the way in, so comparisons never mix the two forms.
"""

from datetime import datetime
from typing import Annotated
from zoneinfo import ZoneInfo

from pydantic import AfterValidator

from ..config import settings


def local_zone() -> ZoneInfo | None:
    """Configured zone for day boundaries, None for the system zone."""
    return ZoneInfo(settings.timezone) if settings.timezone else None


def to_local(value: datetime) -> datetime:
    """Drop the offset of an aware timestamp after converting it to local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone(local_zone()).replace(tzinfo=None)


def local_now(now: datetime | None = None) -> datetime:
    """Current local time, or ``now`` normalized."""
    if now is not None:
        return to_local(now)
    return datetime.now(local_zone()).replace(tzinfo=None)


LocalDatetime = Annotated[datetime, AfterValidator(to_local)]
