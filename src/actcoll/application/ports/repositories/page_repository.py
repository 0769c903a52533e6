"""Page repository port (read-only view of the page aggregate)."""

from typing import Protocol

from actcoll.domain.entities import Page


class PageRepository(Protocol):
    """Port for reading pages and their current policies."""

    async def get_by_id(self, page_id: str) -> Page | None: ...
