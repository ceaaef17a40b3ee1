# tests/unit/extractors/test_unit_expansion.py — v1
"""Tests for deep extraction on a live-like document — expansion and idempotence."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup, Tag

from profilescope.core.models import ExtractionDepth, SectionName, SectionResult
from profilescope.dom.document import BaseDocument
from profilescope.extractors.about_extractor import AboutExtractor

from conftest import about_text

COLLAPSED_TEXT = about_text(100) + "…"
FULL_TEXT = about_text(900)


def collapsible_about_page(text: str) -> str:
    """About card with a see-more button that stays in place once expanded."""
    return (
        "<html><body><main>"
        '<section class="artdeco-card">'
        '<div id="about" class="pv-profile-card__anchor"></div>'
        '<div class="pvs-header__container"><h2><span aria-hidden="true">About</span></h2></div>'
        '<div><div class="inline-show-more-text--is-collapsed">'
        f'<span aria-hidden="true">{text}</span>'
        '<button class="inline-show-more-text__button">see more</button>'
        "</div></div></section>"
        "</main></body></html>"
    )


class ExpandingDocument(BaseDocument):
    """Swaps in the expanded markup on the refresh after an activation."""

    def __init__(self, collapsed: str, expanded: str, reveals: bool = True) -> None:
        super().__init__(url="https://www.linkedin.com/in/jane-doe/")
        self._expanded = expanded
        self._soup = BeautifulSoup(collapsed, "html.parser")
        self._reveals = reveals
        self._pending = False
        self.dispatches = 0
        self.refreshes = 0

    @property
    def root(self) -> BeautifulSoup:
        return self._soup

    async def _dispatch_activation(self, control: Tag, path: str) -> bool:
        self.dispatches += 1
        self._pending = self._reveals
        return True

    async def refresh(self) -> None:
        self.refreshes += 1
        if self._pending:
            self._soup = BeautifulSoup(self._expanded, "html.parser")
            self._pending = False


@pytest.fixture
def extractor() -> AboutExtractor:
    return AboutExtractor(wait_timeout_s=0.2, poll_interval_s=0.05)


@pytest.fixture
def document() -> ExpandingDocument:
    return ExpandingDocument(
        collapsible_about_page(COLLAPSED_TEXT), collapsible_about_page(FULL_TEXT),
    )


class TestDeepExpansion:
    @pytest.mark.asyncio
    async def test_shallow_reads_collapsed_view(self, extractor, document):
        result = await extractor.extract(document)
        assert result.fields["char_count"] == len(COLLAPSED_TEXT)
        assert result.fields["has_show_more"] is True
        assert document.dispatches == 0

    @pytest.mark.asyncio
    async def test_deep_reads_expanded_text(self, extractor, document):
        result = await extractor.extract_deep(document)
        assert result.depth is ExtractionDepth.DEEP
        assert result.fields["char_count"] == len(COLLAPSED_TEXT)
        assert result.details["full_char_count"] == len(FULL_TEXT)
        assert result.details["text"] == FULL_TEXT
        assert document.dispatches == 1
        assert len(document.activated_controls) == 1

    @pytest.mark.asyncio
    async def test_second_deep_pass_dispatches_nothing(self, extractor, document):
        await extractor.extract_deep(document)
        again = await extractor.extract_deep(document)
        assert document.dispatches == 1
        assert again.details["full_char_count"] == len(FULL_TEXT)

    @pytest.mark.asyncio
    async def test_content_never_appears(self, extractor):
        document = ExpandingDocument(
            collapsible_about_page(COLLAPSED_TEXT),
            collapsible_about_page(FULL_TEXT),
            reveals=False,
        )
        result = await extractor.extract_deep(document)
        assert document.dispatches == 1
        # Polled until the wait budget ran out, then read the current view.
        assert document.refreshes >= 2
        assert result.details["full_char_count"] == len(COLLAPSED_TEXT)
        assert result.depth is ExtractionDepth.DEEP

    def test_materialized_once_text_grows(self, extractor):
        collapsed = BeautifulSoup(collapsible_about_page(COLLAPSED_TEXT), "html.parser").section
        expanded = BeautifulSoup(collapsible_about_page(FULL_TEXT), "html.parser").section
        shallow = SectionResult(
            section=SectionName.ABOUT, exists=True, visible_count=1, total_count=1,
            fields={"char_count": len(COLLAPSED_TEXT)},
        )
        assert len(extractor.pending_controls(collapsed)) == 1
        assert extractor.is_materialized(collapsed, shallow) is False
        assert extractor.is_materialized(expanded, shallow) is True
