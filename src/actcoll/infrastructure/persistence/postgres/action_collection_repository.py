"""PostgreSQL action collection repository implementation.

Collections are stored as one row per document; both versions and the policy
set live in JSONB columns and are replaced as a whole on every save.
"""

from datetime import datetime
from uuid import uuid4

import psycopg
from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from actcoll.application.dto.action_collection_dto import (
    BatchFailure,
    BatchResult,
    CollectionFilter,
)
from actcoll.domain.entities import ActionCollection, CollectionVariable, CollectionVersion
from actcoll.domain.policy import policies_from_document, policies_to_document
from actcoll.domain.value_objects import AclPermission, AuthContext, SortOrder, ViewMode
from actcoll.domain.value_objects.acl_permission import granting_permissions

_COLUMNS = "id, application_id, page_id, unpublished, published, policies, created_at, updated_at"

_VERSION_COLUMN = {ViewMode.DRAFT: "unpublished", ViewMode.PUBLISHED: "published"}

_VISIBLE = (
    "EXISTS (SELECT 1 FROM jsonb_each(policies) AS p(kind, subjects) "
    "WHERE p.kind = ANY(%s::text[]) AND p.subjects ?| %s::text[])"
)


def version_to_document(version: CollectionVersion | None) -> dict | None:
    """Serialize a collection version to its JSONB document."""
    if version is None:
        return None
    return {
        "name": version.name,
        "actionIds": list(version.action_ids),
        "archivedActionIds": list(version.archived_action_ids),
        "defaultActionId": version.default_action_id,
        "body": version.body,
        "variables": [{"name": v.name, "value": v.value} for v in version.variables],
        "deletedAt": version.deleted_at.isoformat() if version.deleted_at else None,
    }


def version_from_document(doc: dict | None) -> CollectionVersion | None:
    """Deserialize a collection version from its JSONB document."""
    if doc is None:
        return None
    deleted_at = doc.get("deletedAt")
    return CollectionVersion(
        name=doc.get("name", ""),
        action_ids=tuple(doc.get("actionIds") or ()),
        archived_action_ids=tuple(doc.get("archivedActionIds") or ()),
        default_action_id=doc.get("defaultActionId"),
        body=doc.get("body") or "",
        variables=tuple(
            CollectionVariable(name=v["name"], value=v.get("value", ""))
            for v in doc.get("variables") or ()
        ),
        deleted_at=datetime.fromisoformat(deleted_at) if deleted_at else None,
    )


def _row_to_collection(r: tuple) -> ActionCollection:
    return ActionCollection(
        id=r[0],
        application_id=r[1],
        page_id=r[2],
        unpublished=version_from_document(r[3]),
        published=version_from_document(r[4]),
        policies=policies_from_document(r[5]),
        created_at=r[6],
        updated_at=r[7],
    )


def _order_by(sort: SortOrder | None, view_mode: ViewMode) -> str:
    sort = sort or SortOrder()
    direction = "DESC" if sort.descending else "ASC"
    if sort.field == "id":
        return f" ORDER BY id {direction}"
    if sort.field == "name":
        expr = f"{_VERSION_COLUMN[view_mode]}->>'name'"
    else:
        expr = sort.field
    return f" ORDER BY {expr} {direction}, id ASC"


class PostgresActionCollectionRepository:
    """Action collection repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    def _visibility(
        self, auth: AuthContext, permission: AclPermission
    ) -> tuple[str, list[object]]:
        kinds = sorted(p.value for p in granting_permissions(permission))
        return _VISIBLE, [kinds, sorted(auth.subjects)]

    async def _select(
        self,
        conditions: list[str],
        params: list[object],
        order_by: str = " ORDER BY id",
    ) -> list[ActionCollection]:
        where = " WHERE " + " AND ".join(conditions)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM action_collection{where}{order_by}",
            tuple(params),
        )
        rows = await cur.fetchall()
        return [_row_to_collection(r) for r in rows]

    async def find_by_id(
        self, collection_id: str, auth: AuthContext, permission: AclPermission
    ) -> ActionCollection | None:
        """Get collection by id if visible to the caller."""
        visible, params = self._visibility(auth, permission)
        found = await self._select(["id = %s", visible], [collection_id, *params])
        return found[0] if found else None

    async def find_all_by_application(
        self,
        application_id: str,
        view_mode: ViewMode,
        auth: AuthContext,
        permission: AclPermission,
        sort: SortOrder | None = None,
    ) -> list[ActionCollection]:
        """List visible collections of an application that have a version for the view."""
        return await self.find(
            CollectionFilter(
                application_id=application_id,
                view_mode=view_mode,
                sort=sort or SortOrder(),
            ),
            auth,
            permission,
        )

    async def find_by_page_id(
        self, page_id: str, auth: AuthContext, permission: AclPermission
    ) -> list[ActionCollection]:
        """List visible collections with a live draft on a page."""
        return await self.find(CollectionFilter(page_id=page_id), auth, permission)

    async def find(
        self,
        collection_filter: CollectionFilter,
        auth: AuthContext,
        permission: AclPermission,
    ) -> list[ActionCollection]:
        """List visible collections matching the filter."""
        view_mode = collection_filter.view_mode
        version_col = _VERSION_COLUMN[view_mode]
        visible, params = self._visibility(auth, permission)
        conditions = [visible]
        if collection_filter.application_id:
            conditions.append("application_id = %s")
            params.append(collection_filter.application_id)
        if collection_filter.page_id:
            conditions.append("page_id = %s")
            params.append(collection_filter.page_id)
        if view_mode is ViewMode.PUBLISHED:
            conditions.append("published IS NOT NULL")
        elif not collection_filter.include_deleted:
            conditions.append("unpublished->>'deletedAt' IS NULL")
        if collection_filter.name:
            conditions.append(f"{version_col}->>'name' = %s")
            params.append(collection_filter.name)
        return await self._select(
            conditions, params, _order_by(collection_filter.sort, view_mode)
        )

    async def _upsert(self, collection: ActionCollection) -> None:
        await self._conn.execute(
            f"INSERT INTO action_collection ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET "
            "application_id = EXCLUDED.application_id, page_id = EXCLUDED.page_id, "
            "unpublished = EXCLUDED.unpublished, published = EXCLUDED.published, "
            "policies = EXCLUDED.policies, updated_at = EXCLUDED.updated_at",
            (
                collection.id,
                collection.application_id,
                collection.page_id,
                Jsonb(version_to_document(collection.unpublished)),
                Jsonb(version_to_document(collection.published))
                if collection.published
                else None,
                Jsonb(policies_to_document(collection.policies)),
                collection.created_at,
                collection.updated_at,
            ),
        )

    async def save(self, collection: ActionCollection) -> ActionCollection:
        """Insert or fully replace collection. Assigns an id on first save."""
        if not collection.id:
            collection.id = str(uuid4())
        await self._upsert(collection)
        return collection

    async def save_all(self, collections: list[ActionCollection]) -> BatchResult:
        """Save each collection in its own savepoint, collecting failures."""
        result = BatchResult()
        for collection in collections:
            if not collection.id:
                collection.id = str(uuid4())
            try:
                async with self._conn.transaction():
                    await self._upsert(collection)
            except psycopg.Error as e:
                result.failures.append(BatchFailure(id=collection.id, reason=str(e)))
                continue
            result.succeeded_ids.append(collection.id)
        return result

    async def delete(self, collection_id: str) -> None:
        """Hard delete collection."""
        await self._conn.execute(
            "DELETE FROM action_collection WHERE id = %s",
            (collection_id,),
        )

    async def delete_all(self, collection_ids: list[str]) -> BatchResult:
        """Hard delete each collection in its own savepoint, collecting failures."""
        result = BatchResult()
        for collection_id in collection_ids:
            try:
                async with self._conn.transaction():
                    await self.delete(collection_id)
            except psycopg.Error as e:
                result.failures.append(BatchFailure(id=collection_id, reason=str(e)))
                continue
            result.succeeded_ids.append(collection_id)
        return result
