"""Action repository port (read-only view of the action service)."""

from typing import Protocol

from actcoll.domain.entities import Action


class ActionRepository(Protocol):
    """Port for reading the candidate actions of a page."""

    async def list_by_page_id(self, page_id: str) -> list[Action]: ...

    async def get_by_ids(self, action_ids: list[str]) -> list[Action]: ...
