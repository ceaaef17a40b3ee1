# src/extractors/items.py — v1
"""Readers for the common list-entity layout (title, subtitle, captions, description)."""

from __future__ import annotations

from bs4 import Tag

from profilescope.config.sections import SectionProfile
from profilescope.dom.selectors import safe_select
from profilescope.dom.text import first_text, longest_text, node_text

TITLE_SELECTORS = (
    '.t-bold span[aria-hidden="true"]',
    'h3 span[aria-hidden="true"]',
    ".t-bold",
    "h3",
)
SUBTITLE_SELECTORS = (
    '.t-14.t-normal:not(.t-black--light) span[aria-hidden="true"]',
    '.t-14:not(.t-bold):not(.t-black--light) span[aria-hidden="true"]',
)
CAPTION_SELECTORS = (
    '.t-black--light span[aria-hidden="true"]',
    ".pvs-entity__caption-wrapper",
)
DESCRIPTION_SELECTORS = (
    '[class*="inline-show-more-text"] span[aria-hidden="true"]',
    '.pvs-list__outer-container span[aria-hidden="true"]',
    "p",
)


def item_nodes(region: Tag, profile: SectionProfile) -> list[Tag]:
    """Item nodes from the first item shape that matches, in document order."""
    for selector in profile.item_selectors:
        nodes = safe_select(region, selector)
        if nodes:
            return nodes
    return []


def item_title(item: Tag) -> str:
    return first_text(item, TITLE_SELECTORS)


def item_subtitle(item: Tag) -> str:
    return first_text(item, SUBTITLE_SELECTORS)


def item_captions(item: Tag) -> list[str]:
    captions: list[str] = []
    for selector in CAPTION_SELECTORS:
        for node in safe_select(item, selector):
            text = node_text(node)
            if text and text not in captions:
                captions.append(text)
    return captions


def item_description(item: Tag) -> str:
    return longest_text(item, DESCRIPTION_SELECTORS)


def item_link(item: Tag, exclude: tuple[str, ...] = ("/details/",)) -> str | None:
    for anchor in item.find_all("a", href=True):
        href = anchor["href"]
        if href.startswith("#") or any(x in href for x in exclude):
            continue
        return href
    return None


def split_dot(text: str) -> list[str]:
    """Split LinkedIn's ' · ' separated metadata."""
    return [part.strip() for part in text.split("·") if part.strip()]
