"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from actcoll.interfaces.api.resources.action_collections import (
    ActionCollectionPageResource,
    ActionCollectionResource,
    ActionCollectionsResource,
)
from actcoll.interfaces.api.resources.health import HealthResource
from actcoll.interfaces.api.resources.publish import PublishResource

logger = logging.getLogger(__name__)


async def handle_unexpected_error(req, resp, ex, params) -> None:
    """Log unhandled exceptions and answer 500."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "internal_error", "message": "500 Internal Server Error"}


def create_app(
    collections_resource: ActionCollectionsResource,
    collection_resource: ActionCollectionResource,
    collection_page_resource: ActionCollectionPageResource,
    publish_resource: PublishResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/collections/actions", collections_resource)
    app.add_route("/v1/collections/actions/view", collections_resource, suffix="view")
    app.add_route("/v1/collections/actions/{collection_id}", collection_resource)
    app.add_route("/v1/collections/actions/{collection_id}/page", collection_page_resource)
    app.add_route(
        "/v1/applications/{application_id}/collections/publish", publish_resource
    )
    return app
