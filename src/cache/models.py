# src/cache/models.py — v1
"""Cache domain models: CacheEntry and CacheLookup."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel

from profilescope.core.models import CompletenessBreakdown, ProfileRecord
from profilescope.scoring.quality import QualityAssessment
from profilescope.version import __version__

SECONDS_PER_DAY = 86400

LookupStatus = Literal["hit", "miss", "expired", "content_changed", "corrupt"]


class CacheEntry(BaseModel):
    """Result of one successful analysis, keyed by profile id."""

    profile_id: str
    profile_record: ProfileRecord
    completeness: CompletenessBreakdown
    ai_result: QualityAssessment | None = None
    timestamp: datetime
    ttl_days: int
    version: str = __version__

    @property
    def content_hash(self) -> str:
        return self.profile_record.content_hash

    def age_seconds(self, now: datetime | None = None) -> float:
        now = now or datetime.now(timezone.utc)
        return (now - self.timestamp).total_seconds()

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.age_seconds(now) > self.ttl_days * SECONDS_PER_DAY


class CacheLookup(BaseModel):
    """Outcome of a validated lookup. Only ``hit`` carries a usable entry."""

    status: LookupStatus
    entry: CacheEntry | None = None

    @property
    def hit(self) -> bool:
        return self.status == "hit"


def validate_entry(
    entry: CacheEntry,
    content_hash: str | None,
    now: datetime | None = None,
) -> LookupStatus:
    """Both checks must pass: age within TTL and an unchanged content hash.

    ``content_hash=None`` skips the content check (used when no fresh
    fingerprint is available, e.g. listing or CLI inspection).
    """
    if entry.is_expired(now):
        return "expired"
    if content_hash is not None and entry.content_hash != content_hash:
        return "content_changed"
    return "hit"
