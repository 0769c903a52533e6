"""Pytest fixtures for actcoll tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import pytest

from actcoll.application.dto.action_collection_dto import (
    BatchFailure,
    BatchResult,
    CollectionFilter,
)
from actcoll.domain.entities import (
    Action,
    ActionCollection,
    ActionVersion,
    CollectionVersion,
    Page,
)
from actcoll.domain.policy import is_granted
from actcoll.domain.value_objects import AclPermission, AuthContext, SortOrder, ViewMode


# --- Fake repositories ---


class FakeActionCollectionRepository:
    """In-memory document store for action collections.

    Documents are deep-copied on the way in and out so callers never share
    state with the store, as with a real database.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, ActionCollection] = {}
        self._next_id = 0
        self.fail_ids: set[str] = set()

    def add(self, collection: ActionCollection) -> ActionCollection:
        """Helper to seed a document without going through save()."""
        if not collection.id:
            collection.id = self._new_id()
        self._by_id[collection.id] = copy.deepcopy(collection)
        return collection

    def get(self, collection_id: str) -> ActionCollection | None:
        """Helper to read a document ignoring permissions."""
        coll = self._by_id.get(collection_id)
        return copy.deepcopy(coll) if coll else None

    def _new_id(self) -> str:
        self._next_id += 1
        return f"ac-{self._next_id:03d}"

    async def find_by_id(
        self, collection_id: str, auth: AuthContext, permission: AclPermission
    ) -> ActionCollection | None:
        coll = self._by_id.get(collection_id)
        if not coll or not is_granted(coll.policies, auth.subjects, permission):
            return None
        return copy.deepcopy(coll)

    async def find_all_by_application(
        self,
        application_id: str,
        view_mode: ViewMode,
        auth: AuthContext,
        permission: AclPermission,
        sort: SortOrder | None = None,
    ) -> list[ActionCollection]:
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
        return await self.find(CollectionFilter(page_id=page_id), auth, permission)

    async def find(
        self,
        collection_filter: CollectionFilter,
        auth: AuthContext,
        permission: AclPermission,
    ) -> list[ActionCollection]:
        view_mode = collection_filter.view_mode
        items = []
        for coll in self._by_id.values():
            if not is_granted(coll.policies, auth.subjects, permission):
                continue
            if collection_filter.application_id and coll.application_id != collection_filter.application_id:
                continue
            if collection_filter.page_id and coll.page_id != collection_filter.page_id:
                continue
            version = coll.version_for(view_mode)
            if version is None:
                continue
            if (
                view_mode is ViewMode.DRAFT
                and version.is_deleted
                and not collection_filter.include_deleted
            ):
                continue
            if collection_filter.name and version.name != collection_filter.name:
                continue
            items.append(copy.deepcopy(coll))

        sort = collection_filter.sort or SortOrder()
        items.sort(key=lambda c: c.id)
        if sort.field == "name":
            items.sort(key=lambda c: c.version_for(view_mode).name, reverse=sort.descending)
        elif sort.field != "id":
            items.sort(key=lambda c: getattr(c, sort.field), reverse=sort.descending)
        elif sort.descending:
            items.reverse()
        return items

    async def save(self, collection: ActionCollection) -> ActionCollection:
        if not collection.id:
            collection.id = self._new_id()
        self._by_id[collection.id] = copy.deepcopy(collection)
        return collection

    async def save_all(self, collections: list[ActionCollection]) -> BatchResult:
        result = BatchResult()
        for collection in collections:
            if not collection.id:
                collection.id = self._new_id()
            if collection.id in self.fail_ids:
                result.failures.append(BatchFailure(id=collection.id, reason="write conflict"))
                continue
            self._by_id[collection.id] = copy.deepcopy(collection)
            result.succeeded_ids.append(collection.id)
        return result

    async def delete(self, collection_id: str) -> None:
        self._by_id.pop(collection_id, None)

    async def delete_all(self, collection_ids: list[str]) -> BatchResult:
        result = BatchResult()
        for collection_id in collection_ids:
            if collection_id in self.fail_ids:
                result.failures.append(BatchFailure(id=collection_id, reason="delete conflict"))
                continue
            self._by_id.pop(collection_id, None)
            result.succeeded_ids.append(collection_id)
        return result


class FakeActionRepository:
    """In-memory action repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Action] = {}

    def add(self, action: Action) -> Action:
        self._by_id[action.id] = action
        return action

    def remove(self, action_id: str) -> None:
        self._by_id.pop(action_id, None)

    async def list_by_page_id(self, page_id: str) -> list[Action]:
        return sorted(
            (a for a in self._by_id.values() if a.page_id == page_id),
            key=lambda a: a.id,
        )

    async def get_by_ids(self, action_ids: list[str]) -> list[Action]:
        return [self._by_id[i] for i in sorted(set(action_ids)) if i in self._by_id]


class FakePageRepository:
    """In-memory page repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Page] = {}

    def add(self, page: Page) -> Page:
        self._by_id[page.id] = page
        return page

    async def get_by_id(self, page_id: str) -> Page | None:
        return self._by_id.get(page_id)


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.action_collections = FakeActionCollectionRepository()
        self.actions = FakeActionRepository()
        self.pages = FakePageRepository()
        self.committed = 0

    async def commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        pass


# --- Builders ---


def make_action(
    action_id: str,
    page_id: str = "p1",
    *,
    published: bool = False,
    deleted: bool = False,
    application_id: str = "app1",
) -> Action:
    """Build an action with a draft version and optionally a published one."""
    deleted_at = datetime(2026, 1, 1, tzinfo=UTC) if deleted else None
    return Action(
        id=action_id,
        application_id=application_id,
        page_id=page_id,
        unpublished=ActionVersion(name=f"{action_id}_name", deleted_at=deleted_at),
        published=ActionVersion(name=f"{action_id}_name") if published else None,
    )


def make_collection(
    collection_id: str | None = "c1",
    *,
    name: str = "Utils",
    page_id: str = "p1",
    application_id: str = "app1",
    action_ids: tuple[str, ...] = ("a1", "a2"),
    published: CollectionVersion | None = None,
    policies: dict[str, frozenset[str]] | None = None,
) -> ActionCollection:
    """Build a collection with a draft version."""
    now = datetime(2026, 1, 1, tzinfo=UTC)
    return ActionCollection(
        id=collection_id,
        application_id=application_id,
        page_id=page_id,
        unpublished=CollectionVersion(name=name, action_ids=action_ids),
        published=published,
        policies=policies
        if policies is not None
        else {
            AclPermission.READ_ACTIONS.value: frozenset({"u1"}),
            AclPermission.MANAGE_ACTIONS.value: frozenset({"editor"}),
            AclPermission.DELETE_ACTIONS.value: frozenset({"editor"}),
        },
        created_at=now,
        updated_at=now,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields the test's FakeUnitOfWork."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield fake_uow
        await fake_uow.commit()

    return _factory


@pytest.fixture
def editor() -> AuthContext:
    """Caller allowed to manage page p1 and its collections."""
    return AuthContext(user_id="e1", groups=frozenset({"editor"}))


@pytest.fixture
def viewer() -> AuthContext:
    """Caller with read access only."""
    return AuthContext(user_id="u1")


@pytest.fixture
def page() -> Page:
    """Page p1 of app1, managed by group `editor`, readable by u1."""
    return Page(
        id="p1",
        application_id="app1",
        name="Home",
        policies={
            AclPermission.READ_PAGES.value: frozenset({"u1"}),
            AclPermission.MANAGE_PAGES.value: frozenset({"editor"}),
            AclPermission.DELETE_PAGES.value: frozenset({"editor"}),
        },
    )


@pytest.fixture
def seeded_uow(fake_uow: FakeUnitOfWork, page: Page) -> FakeUnitOfWork:
    """UoW holding page p1 with draft actions a1, a2 and a3 on it."""
    fake_uow.pages.add(page)
    fake_uow.pages.add(Page(id="p2", application_id="app1", name="Other", policies=page.policies))
    for action_id in ("a1", "a2", "a3"):
        fake_uow.actions.add(make_action(action_id))
    fake_uow.actions.add(make_action("b1", page_id="p2"))
    return fake_uow
