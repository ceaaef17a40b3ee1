# src/extractors/certifications_extractor.py — v1
"""Licenses and certifications."""

from __future__ import annotations

import re
from collections import Counter
from typing import Any

from bs4 import Tag

from profilescope.core.models import ScanResult, SectionName, SectionResult
from profilescope.extractors import items as item_reader
from profilescope.extractors.base_extractor import BaseSectionExtractor

_CREDENTIAL_ID = re.compile(r"Credential ID[:\s]+(\S+)", re.IGNORECASE)
_ISSUED = re.compile(r"Issued\s+(.+?)(?:\s*·|$)", re.IGNORECASE)


class CertificationsExtractor(BaseSectionExtractor):
    section = SectionName.CERTIFICATIONS
    expansion_selectors = (".pvs-list__footer-wrapper button",)

    def _read_certification(self, item: Tag) -> dict[str, Any]:
        captions = " · ".join(item_reader.item_captions(item))
        credential = _CREDENTIAL_ID.search(item.get_text(" ", strip=True))
        issued = _ISSUED.search(captions)
        return {
            "name": item_reader.item_title(item),
            "issuer": item_reader.item_subtitle(item),
            "issued": issued.group(1).strip() if issued else "",
            "credential_id": credential.group(1) if credential else None,
        }

    def shallow_fields(self, region: Tag, scan: ScanResult) -> dict[str, Any]:
        certs = [self._read_certification(i) for i in item_reader.item_nodes(region, self.profile)]
        return {"issuers": sorted({c["issuer"] for c in certs if c["issuer"]})}

    def deep_details(self, region: Tag, shallow: SectionResult) -> dict[str, Any]:
        certs = [self._read_certification(i) for i in item_reader.item_nodes(region, self.profile)]
        by_issuer = Counter(c["issuer"] for c in certs if c["issuer"])
        return {
            "certifications": certs,
            "by_issuer": dict(sorted(by_issuer.items())),
        }
