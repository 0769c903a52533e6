"""Publish API resource."""

import falcon.asgi

from actcoll.application.use_cases.action_collection.publish_action_collections import (
    PublishActionCollectionsUseCase,
)
from actcoll.domain.exceptions import PartialBatchFailure


class PublishResource:
    """POST /v1/applications/{application_id}/collections/publish."""

    def __init__(self, publish: PublishActionCollectionsUseCase) -> None:
        self._publish = publish

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        application_id: str,
    ) -> None:
        """Publish drafts of every collection of the application."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "unauthorized", "message": "Unauthorized"}
            return

        try:
            result = await self._publish.execute(user, application_id)
        except PartialBatchFailure as e:
            resp.status = falcon.HTTP_207
            resp.media = {
                "error": "partial_batch_failure",
                "message": str(e),
                "saved": e.saved_ids,
                "removed": e.removed_ids,
                "failures": [{"id": f.id, "reason": f.reason} for f in e.failures],
            }
            return

        resp.media = {"published": result.published_ids, "removed": result.removed_ids}
        resp.status = falcon.HTTP_200
