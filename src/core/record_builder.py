# src/core/record_builder.py — v1
"""Incremental construction of a ProfileRecord.

The builder is created empty at the start of an extraction pass. Each
section task writes exactly one slot; ``freeze`` fills any slot that never
settled with an absent result and stamps the content hash.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from profilescope.cache.fingerprint import compute_content_hash
from profilescope.core.models import ProfileRecord, SectionName, SectionResult


class RecordError(Exception):
    """Raised on a write that would break the one-writer-per-slot rule."""


class ProfileRecordBuilder:
    """Collects one SectionResult per section, then freezes into a ProfileRecord."""

    def __init__(
        self,
        profile_id: str,
        sections: Iterable[SectionName] | None = None,
    ) -> None:
        self._profile_id = profile_id
        self._expected = tuple(sections) if sections is not None else tuple(SectionName)
        self._results: dict[SectionName, SectionResult] = {}

    @property
    def profile_id(self) -> str:
        return self._profile_id

    @property
    def settled(self) -> frozenset[SectionName]:
        return frozenset(self._results)

    @property
    def is_complete(self) -> bool:
        return all(name in self._results for name in self._expected)

    def set_section(self, name: SectionName, result: SectionResult) -> None:
        """Write the slot for ``name``. Each slot may be written once."""
        if name in self._results:
            raise RecordError(f"Section {name.value!r} already settled")
        if result.section is not name:
            raise RecordError(
                f"Result for {result.section.value!r} written to slot {name.value!r}"
            )
        self._results[name] = result

    def freeze(self, extracted_at: datetime | None = None) -> ProfileRecord:
        sections: dict[SectionName, SectionResult] = {}
        for name in self._expected:
            sections[name] = self._results.get(name) or SectionResult.absent(name)
        for name, result in self._results.items():
            sections.setdefault(name, result)
        return ProfileRecord(
            profile_id=self._profile_id,
            sections=sections,
            content_hash=compute_content_hash(sections),
            extracted_at=extracted_at or datetime.now(timezone.utc),
        )
