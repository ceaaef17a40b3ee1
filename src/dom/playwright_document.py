# src/dom/playwright_document.py — v1
"""Live page view backed by a Playwright page.

Requires the ``browser`` extra. The tree is re-parsed from
``page.content()`` on every refresh; activations click the control's
structural CSS path.
"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, Tag

from profilescope.dom.document import DEFAULT_PARSER, BaseDocument

logger = logging.getLogger(__name__)


class PlaywrightDocument(BaseDocument):
    """Document view over a live ``playwright.async_api.Page``."""

    def __init__(
        self,
        page: Any,
        click_timeout_ms: int = 2000,
        parser: str = DEFAULT_PARSER,
    ) -> None:
        super().__init__(url=getattr(page, "url", None))
        self._page = page
        self._click_timeout_ms = click_timeout_ms
        self._parser = parser
        self._soup = BeautifulSoup("", parser)

    @classmethod
    async def from_page(cls, page: Any, **kwargs: Any) -> PlaywrightDocument:
        """Build a document and read the page's current content."""
        document = cls(page, **kwargs)
        await document.refresh()
        return document

    @property
    def root(self) -> BeautifulSoup:
        return self._soup

    async def refresh(self) -> None:
        html = await self._page.content()
        self._soup = BeautifulSoup(html, self._parser)

    async def _dispatch_activation(self, control: Tag, path: str) -> bool:
        from playwright.async_api import Error as PlaywrightError

        try:
            await self._page.locator(path).first.click(
                timeout=self._click_timeout_ms,
            )
        except PlaywrightError as e:
            logger.warning("Could not activate control %s: %s", path, e)
            return False
        logger.debug("Activated control %s", path)
        return True
