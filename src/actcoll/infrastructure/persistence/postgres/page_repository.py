"""PostgreSQL page repository implementation (read-only)."""

from psycopg import AsyncConnection

from actcoll.domain.entities import Page
from actcoll.domain.policy import policies_from_document


class PostgresPageRepository:
    """Page repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, page_id: str) -> Page | None:
        """Get page by id."""
        cur = await self._conn.execute(
            "SELECT id, application_id, name, policies FROM page WHERE id = %s",
            (page_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Page(
            id=r[0],
            application_id=r[1],
            name=r[2],
            policies=policies_from_document(r[3]),
        )
