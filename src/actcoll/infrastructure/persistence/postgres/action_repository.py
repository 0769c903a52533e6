"""PostgreSQL action repository implementation (read-only)."""

from datetime import datetime

from psycopg import AsyncConnection

from actcoll.domain.entities import Action, ActionVersion


def _parse_ts(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _version_from_document(doc: dict | None) -> ActionVersion | None:
    if doc is None:
        return None
    return ActionVersion(
        name=doc.get("name", ""),
        deleted_at=_parse_ts(doc.get("deletedAt")),
        archived_at=_parse_ts(doc.get("archivedAt")),
    )


def _row_to_action(r: tuple) -> Action:
    return Action(
        id=r[0],
        application_id=r[1],
        page_id=r[2],
        unpublished=_version_from_document(r[3]),
        published=_version_from_document(r[4]),
    )


class PostgresActionRepository:
    """Action repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_by_page_id(self, page_id: str) -> list[Action]:
        """List all actions on a page."""
        cur = await self._conn.execute(
            "SELECT id, application_id, page_id, unpublished, published "
            "FROM action WHERE page_id = %s ORDER BY id",
            (page_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_action(r) for r in rows]

    async def get_by_ids(self, action_ids: list[str]) -> list[Action]:
        """Get actions by ids; unknown ids are omitted."""
        if not action_ids:
            return []
        cur = await self._conn.execute(
            "SELECT id, application_id, page_id, unpublished, published "
            "FROM action WHERE id = ANY(%s::text[]) ORDER BY id",
            (list(action_ids),),
        )
        rows = await cur.fetchall()
        return [_row_to_action(r) for r in rows]
