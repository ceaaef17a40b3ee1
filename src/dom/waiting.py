# src/dom/waiting.py — v1
"""Bounded polling for content that materializes after an expansion."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from bs4 import BeautifulSoup

from profilescope.dom.document import BaseDocument

logger = logging.getLogger(__name__)


async def wait_until(
    document: BaseDocument,
    predicate: Callable[[BeautifulSoup], bool],
    timeout_s: float,
    poll_interval_s: float,
) -> bool:
    """Refresh and test ``predicate`` until it holds or ``timeout_s`` elapses.

    Returns:
        True if the predicate held before the deadline, False otherwise.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_s
    attempts = 0
    while True:
        attempts += 1
        await document.refresh()
        if predicate(document.root):
            return True
        remaining = deadline - loop.time()
        if remaining <= 0:
            logger.debug("Wait gave up after %d checks (%.2fs)", attempts, timeout_s)
            return False
        await asyncio.sleep(min(poll_interval_s, remaining))
