"""Action collection API resources."""

import falcon.asgi

from actcoll.application.dto.action_collection_dto import (
    ActionCollectionInput,
    CollectionFilter,
)
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
from actcoll.application.use_cases.action_collection.update_action_collection import (
    UpdateActionCollectionUseCase,
)
from actcoll.domain.exceptions import NotFound, ValidationError, VersionUnavailable
from actcoll.domain.value_objects import SortOrder, ViewMode


def _fail(resp: falcon.asgi.Response, status: str, kind: str, message: str) -> None:
    resp.status = status
    resp.media = {"error": kind, "message": message}


def _unauthorized(resp: falcon.asgi.Response) -> None:
    _fail(resp, falcon.HTTP_401, "unauthorized", "Unauthorized")


def _optional_str(body: dict, key: str) -> str | None:
    value = body.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def _parse_input(body: dict) -> ActionCollectionInput:
    """Build write input from a request body. Raises KeyError/TypeError/ValueError.

    Absent keys stay `None` so an update only touches the fields it sends.
    """
    if not isinstance(body, dict):
        raise TypeError("Request body must be a JSON object")
    if "name" in body and not isinstance(body["name"], str):
        raise TypeError("name must be a string")

    action_ids = body.get("actionIds")
    if action_ids is not None:
        if not isinstance(action_ids, list) or not all(isinstance(a, str) for a in action_ids):
            raise TypeError("actionIds must be a list of strings")

    variables = body.get("variables")
    if variables is not None:
        if not isinstance(variables, list) or not all(isinstance(v, dict) for v in variables):
            raise TypeError("variables must be a list of objects")
        variables = [(_optional_str(v, "name") or "", str(v.get("value", ""))) for v in variables]
        if not all(name for name, _ in variables):
            raise ValueError("variables need a name")

    default_action_id = _optional_str(body, "defaultActionId")
    if "defaultActionId" in body and default_action_id is None:
        default_action_id = ""

    return ActionCollectionInput(
        name=body.get("name"),
        page_id=_optional_str(body, "pageId"),
        action_ids=action_ids,
        default_action_id=default_action_id,
        body=_optional_str(body, "body"),
        variables=variables,
    )


class ActionCollectionsResource:
    """GET/POST /v1/collections/actions - list by view mode and create."""

    def __init__(
        self,
        get_collections: GetActionCollectionsUseCase,
        create_collection: CreateActionCollectionUseCase,
        default_sort: SortOrder | None = None,
    ) -> None:
        self._get_collections = get_collections
        self._create_collection = create_collection
        self._default_sort = default_sort or SortOrder()

    def _parse_sort(self, value: str | None) -> SortOrder:
        return SortOrder.parse(value) if value else self._default_sort

    async def _list(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, view_mode: ViewMode
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            collection_filter = CollectionFilter(
                application_id=req.get_param("applicationId"),
                page_id=req.get_param("pageId"),
                name=req.get_param("name"),
                view_mode=view_mode,
                sort=self._parse_sort(req.get_param("sort")),
            )
            items = await self._get_collections.execute(user, collection_filter)
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, "validation_error", str(e))
            return

        resp.media = {"items": [dto.to_dict() for dto in items]}
        resp.status = falcon.HTTP_200

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List collections; `viewMode=true` selects the published view."""
        view_mode = ViewMode.from_flag(req.get_param_as_bool("viewMode", default=False))
        await self._list(req, resp, view_mode)

    async def on_get_view(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List published collections."""
        await self._list(req, resp, ViewMode.PUBLISHED)

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create collection draft on a page."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            input_data = _parse_input(await req.get_media())
        except (KeyError, TypeError, ValueError) as e:
            _fail(resp, falcon.HTTP_400, "validation_error", f"Invalid request body: {e}")
            return

        try:
            dto = await self._create_collection.execute(user, input_data)
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, "not_found", str(e))
            return
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, "validation_error", str(e))
            return

        resp.media = dto.to_dict()
        resp.status = falcon.HTTP_201


class ActionCollectionResource:
    """GET/PUT/DELETE /v1/collections/actions/{collection_id}."""

    def __init__(
        self,
        get_collection: GetActionCollectionUseCase,
        update_collection: UpdateActionCollectionUseCase,
        delete_collection: DeleteUnpublishedActionCollectionUseCase,
    ) -> None:
        self._get_collection = get_collection
        self._update_collection = update_collection
        self._delete_collection = delete_collection

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: str,
    ) -> None:
        """Get collection in the view selected by `viewMode`."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        view_mode = ViewMode.from_flag(req.get_param_as_bool("viewMode", default=False))
        try:
            dto = await self._get_collection.execute(user, collection_id, view_mode)
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, "not_found", str(e))
            return
        except VersionUnavailable as e:
            _fail(resp, falcon.HTTP_409, "version_unavailable", str(e))
            return

        resp.media = dto.to_dict()
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: str,
    ) -> None:
        """Update collection draft."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            input_data = _parse_input(await req.get_media())
        except (KeyError, TypeError, ValueError) as e:
            _fail(resp, falcon.HTTP_400, "validation_error", f"Invalid request body: {e}")
            return

        try:
            dto = await self._update_collection.execute(user, collection_id, input_data)
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, "not_found", str(e))
            return
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, "validation_error", str(e))
            return

        resp.media = dto.to_dict()
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: str,
    ) -> None:
        """Delete collection draft."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            dto = await self._delete_collection.execute(user, collection_id)
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, "not_found", str(e))
            return

        resp.media = dto.to_dict()
        resp.status = falcon.HTTP_200


class ActionCollectionPageResource:
    """PUT /v1/collections/actions/{collection_id}/page - re-attach to page."""

    def __init__(self, attach_to_page: AttachActionCollectionToPageUseCase) -> None:
        self._attach = attach_to_page

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: str,
    ) -> None:
        """Propagate the page's current policies onto the collection."""
        user = getattr(req.context, "user", None)
        if not user:
            _unauthorized(resp)
            return

        try:
            body = await req.get_media()
            page_id = str(body["pageId"])
        except (KeyError, TypeError) as e:
            _fail(resp, falcon.HTTP_400, "validation_error", f"Missing required field: {e}")
            return

        try:
            collection = await self._attach.execute(user, collection_id, page_id)
        except NotFound as e:
            _fail(resp, falcon.HTTP_404, "not_found", str(e))
            return
        except ValidationError as e:
            _fail(resp, falcon.HTTP_400, "validation_error", str(e))
            return

        resp.media = {
            "id": collection.id,
            "pageId": collection.page_id,
            "policies": {k: sorted(v) for k, v in sorted(collection.policies.items())},
        }
        resp.status = falcon.HTTP_200
