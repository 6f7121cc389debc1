# Paging — walk Dribbble's page/per_page collections.
# Created: 2026-10-19

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from dribbble_oauth.request_builder import BodyKind
from dribbble_oauth.responses import ApiResult

if TYPE_CHECKING:
    from dribbble_oauth.client import DribbbleClient

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 30


async def collect_pages(
    client: DribbbleClient,
    path: str,
    params: Mapping[str, Any] | None = None,
    per_page: int = DEFAULT_PER_PAGE,
    max_pages: int | None = None,
) -> tuple[list[Any], ApiResult]:
    """Fetch ``path`` page by page and concatenate the items.

    Stops at the first empty page, at a page shorter than ``per_page``,
    at a payload that is not a list, at an error, or after ``max_pages``.

    Returns:
        The collected items and the last ApiResult (check its ``error``
        to tell a complete walk from an interrupted one).
    """
    items: list[Any] = []
    page = 1
    while True:
        query = {**(params or {}), "page": page, "per_page": per_page}
        result = await client.send(path, "GET", BodyKind.QUERY, query)
        if result.error is not None:
            logger.warning("Stopped paging %s at page %d: %s", path, page, result.error)
            return items, result
        if not isinstance(result.json, list) or not result.json:
            return items, result

        items.extend(result.json)
        if len(result.json) < per_page:
            return items, result
        if max_pages is not None and page >= max_pages:
            return items, result
        page += 1
