# src/dom/document.py — v1
"""Document views over a rendered profile page.

A document exposes its current tree as BeautifulSoup and an idempotent
expansion capability. Only deep extraction calls ``activate``; every other
phase reads ``root`` without touching the page.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from profilescope.dom.selectors import css_path

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "html.parser"


def is_expanded(control: Tag) -> bool:
    """True if the control reports its content as already revealed."""
    return control.get("aria-expanded") == "true"


def navigates_away(control: Tag) -> bool:
    """True for links that would leave the page instead of expanding in place."""
    if control.name != "a":
        return False
    href = control.get("href") or ""
    return bool(href) and not href.startswith("#")


class BaseDocument(ABC):
    """Abstract view of the rendered profile document."""

    def __init__(self, url: str | None = None) -> None:
        self._url = url
        self._activated: set[str] = set()

    @property
    @abstractmethod
    def root(self) -> BeautifulSoup:
        """Current parsed tree."""

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def activated_controls(self) -> frozenset[str]:
        return frozenset(self._activated)

    async def activate(self, control: Tag) -> bool:
        """Trigger an expansion control once.

        Returns True if an activation was dispatched. Already-expanded
        controls, controls activated earlier and links that navigate away
        are no-ops returning False.
        """
        if is_expanded(control) or navigates_away(control):
            return False
        path = css_path(control)
        if path in self._activated:
            return False
        dispatched = await self._dispatch_activation(control, path)
        if dispatched:
            self._activated.add(path)
        return dispatched

    async def refresh(self) -> None:
        """Re-read the document after a possible mutation."""
        return None

    @abstractmethod
    async def _dispatch_activation(self, control: Tag, path: str) -> bool:
        """Perform the activation. ``path`` addresses ``control`` structurally."""


class StaticDocument(BaseDocument):
    """Immutable snapshot of a page; expansion controls cannot be activated."""

    def __init__(
        self,
        html: str,
        url: str | None = None,
        parser: str = DEFAULT_PARSER,
    ) -> None:
        super().__init__(url=url)
        self._parser = parser
        self._soup = BeautifulSoup(html, parser)

    @classmethod
    def from_file(cls, path: Path, url: str | None = None) -> StaticDocument:
        return cls(Path(path).read_text(encoding="utf-8"), url=url)

    @property
    def root(self) -> BeautifulSoup:
        return self._soup

    def load(self, html: str) -> None:
        """Replace the snapshot with new markup."""
        self._soup = BeautifulSoup(html, self._parser)

    async def _dispatch_activation(self, control: Tag, path: str) -> bool:
        logger.debug("Static snapshot, not activating %s", path)
        return False
