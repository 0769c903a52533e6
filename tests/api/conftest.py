"""Fixtures for API tests."""

import pytest

from actcoll.application.use_cases.action_collection.attach_to_page import (
    AttachActionCollectionToPageUseCase,
)
from actcoll.application.use_cases.action_collection.create_action_collection import (
    CreateActionCollectionUseCase,
)
from actcoll.application.use_cases.action_collection.delete_unpublished_action_collection import (
    DeleteUnpublishedActionCollectionUseCase,
)
from actcoll.application.use_cases.action_collection.get_action_collection import (
    GetActionCollectionUseCase,
)
from actcoll.application.use_cases.action_collection.get_action_collections import (
    GetActionCollectionsUseCase,
)
from actcoll.application.use_cases.action_collection.publish_action_collections import (
    PublishActionCollectionsUseCase,
)
from actcoll.application.use_cases.action_collection.update_action_collection import (
    UpdateActionCollectionUseCase,
)
from actcoll.domain.value_objects import AuthContext
from actcoll.interfaces.api.app import create_app
from actcoll.interfaces.api.resources.action_collections import (
    ActionCollectionPageResource,
    ActionCollectionResource,
    ActionCollectionsResource,
)
from actcoll.interfaces.api.resources.health import HealthResource
from actcoll.interfaces.api.resources.publish import PublishResource


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing.

    Defaults to an editor; `X-Test-User: none` simulates a rejected token and
    any other value a plain user with that id.
    """

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User")
        if user_id == "none":
            req.context.user = None
        elif user_id:
            req.context.user = AuthContext(user_id=user_id)
        else:
            req.context.user = AuthContext(user_id="e1", groups=frozenset({"editor"}))


@pytest.fixture
def default_sort():
    """Listing sort used when a request has none; override with parametrize."""
    return None


@pytest.fixture
def app(seeded_uow, uow_factory, default_sort):
    """Falcon ASGI app with API resources over the seeded fake unit of work."""
    return create_app(
        ActionCollectionsResource(
            GetActionCollectionsUseCase(unit_of_work_factory=uow_factory),
            CreateActionCollectionUseCase(unit_of_work_factory=uow_factory),
            default_sort=default_sort,
        ),
        ActionCollectionResource(
            GetActionCollectionUseCase(unit_of_work_factory=uow_factory),
            UpdateActionCollectionUseCase(unit_of_work_factory=uow_factory),
            DeleteUnpublishedActionCollectionUseCase(unit_of_work_factory=uow_factory),
        ),
        ActionCollectionPageResource(
            AttachActionCollectionToPageUseCase(unit_of_work_factory=uow_factory),
        ),
        PublishResource(PublishActionCollectionsUseCase(unit_of_work_factory=uow_factory)),
        HealthResource(),
        middleware=[AuthBypassMiddleware()],
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient

    return TestClient(app)
