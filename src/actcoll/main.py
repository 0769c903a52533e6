"""Application entry point and composition root."""

import logging

from actcoll import __version__
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
from actcoll.config import Settings, get_settings
from actcoll.domain.value_objects import SortOrder
from actcoll.infrastructure.auth.keycloak_provider import KeycloakProvider
from actcoll.infrastructure.persistence.postgres.connection import create_pool
from actcoll.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from actcoll.interfaces.api.app import create_app
from actcoll.interfaces.api.middleware.auth import AuthMiddleware
from actcoll.interfaces.api.middleware.cors import CORSMiddleware
from actcoll.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from actcoll.interfaces.api.resources.action_collections import (
    ActionCollectionPageResource,
    ActionCollectionResource,
    ActionCollectionsResource,
)
from actcoll.interfaces.api.resources.health import HealthResource
from actcoll.interfaces.api.resources.publish import PublishResource

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logger from settings."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_actcoll_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; bearer tokens will be rejected")

    collections_resource = ActionCollectionsResource(
        GetActionCollectionsUseCase(unit_of_work_factory=uow_factory),
        CreateActionCollectionUseCase(unit_of_work_factory=uow_factory),
        default_sort=SortOrder.parse(settings.default_sort),
    )
    collection_resource = ActionCollectionResource(
        GetActionCollectionUseCase(unit_of_work_factory=uow_factory),
        UpdateActionCollectionUseCase(unit_of_work_factory=uow_factory),
        DeleteUnpublishedActionCollectionUseCase(unit_of_work_factory=uow_factory),
    )
    collection_page_resource = ActionCollectionPageResource(
        AttachActionCollectionToPageUseCase(unit_of_work_factory=uow_factory),
    )
    publish_resource = PublishResource(
        PublishActionCollectionsUseCase(unit_of_work_factory=uow_factory),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app = create_app(
        collections_resource,
        collection_resource,
        collection_page_resource,
        publish_resource,
        HealthResource(pool),
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
    )
    logger.info("actcoll v%s configured (%s)", __version__, settings.environment)
    return app


def main() -> None:
    """CLI entry point - run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "actcoll.main:create_actcoll_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else settings.log_level.lower(),
    )
