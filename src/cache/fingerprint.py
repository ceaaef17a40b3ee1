# src/cache/fingerprint.py — v1
"""Content fingerprinting for profile records.

The content hash is a SHA-256 over a canonical JSON rendering of every
section's presence, counts and normalized fields. Deep payloads are not
part of it, so a shallow and a deep record of the same content agree.
"""

from __future__ import annotations

import hashlib
import json
import re
from collections.abc import Mapping
from typing import Any

from profilescope.core.models import SectionName, SectionResult


def compute_content_hash(sections: Mapping[SectionName, SectionResult]) -> str:
    """Stable digest over normalized section fields.

    Sections are rendered in enumeration order, keys sorted, so the digest
    does not depend on the order in which section tasks settled.
    """
    canonical: dict[str, Any] = {}
    for name in SectionName:
        result = sections.get(name)
        if result is None:
            continue
        canonical[name.value] = {
            "exists": result.exists,
            "visible_count": result.visible_count,
            "total_count": result.total_count,
            "fields": result.fields,
        }
    payload = json.dumps(
        canonical, sort_keys=True, separators=(",", ":"), default=str,
        ensure_ascii=False,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def text_digest(text: str, length: int = 16) -> str:
    """Short SHA-256 of normalized text (case/whitespace/punctuation stripped)."""
    normalized = _normalize_text(text)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:length]


def _normalize_text(text: str) -> str:
    """Lowercase, strip punctuation, collapse whitespace."""
    text = text.lower()
    text = re.sub(r"[^\w\s]", "", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()
