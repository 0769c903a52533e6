"""API resource tests."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest
from falcon.testing import TestClient

from actcoll.domain.value_objects import SortOrder

from tests.conftest import make_action, make_collection


def _create(client: TestClient, **overrides) -> dict:
    body = {"name": "Utils", "pageId": "p1", "actionIds": ["a1", "a2"]}
    body.update(overrides)
    r = client.simulate_post("/v1/collections/actions", json=body)
    assert r.status_code == 201, r.json
    return r.json


class TestCreate:
    def test_create_returns_draft_dto(self, client: TestClient) -> None:
        body = _create(
            client,
            body="export default {}",
            variables=[{"name": "count", "value": "1"}],
            defaultActionId="a1",
        )
        assert body["id"] == "ac-001"
        assert body["viewMode"] == "draft"
        assert body["applicationId"] == "app1"
        assert body["defaultActionId"] == "a1"
        assert body["variables"] == [{"name": "count", "value": "1"}]
        assert [a["id"] for a in body["actions"]] == ["a1", "a2"]

    def test_create_missing_name(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/collections/actions", json={"pageId": "p1"})
        assert r.status_code == 400
        assert r.json["error"] == "validation_error"

    @pytest.mark.parametrize(
        "body",
        [
            {"name": None, "pageId": "p1"},
            {"name": 42, "pageId": "p1"},
            {"name": "Utils", "pageId": 1},
            {"name": "Utils", "pageId": "p1", "actionIds": [1, 2]},
            {"name": "Utils", "pageId": "p1", "defaultActionId": ["a1"]},
            {"name": "Utils", "pageId": "p1", "variables": ["count"]},
        ],
    )
    def test_create_rejects_non_string_fields(self, client: TestClient, body: dict) -> None:
        r = client.simulate_post("/v1/collections/actions", json=body)
        assert r.status_code == 400
        assert r.json["error"] == "validation_error"

    def test_create_cross_page_actions(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/collections/actions",
            json={"name": "X", "pageId": "p1", "actionIds": ["a1", "b1"]},
        )
        assert r.status_code == 400
        assert r.json["error"] == "validation_error"

    def test_create_unknown_page(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/collections/actions", json={"name": "X", "pageId": "nope"}
        )
        assert r.status_code == 404
        assert r.json["error"] == "not_found"

    def test_create_unauthorized(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/collections/actions",
            json={"name": "X", "pageId": "p1"},
            headers={"X-Test-User": "none"},
        )
        assert r.status_code == 401


class TestRead:
    def test_get_draft_and_unpublished_view(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_get(f"/v1/collections/actions/{created['id']}")
        assert r.status_code == 200
        assert r.json["name"] == "Utils"

        r = client.simulate_get(
            f"/v1/collections/actions/{created['id']}", params={"viewMode": "true"}
        )
        assert r.status_code == 409
        assert r.json["error"] == "version_unavailable"

    def test_get_invisible_is_404(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_get(
            f"/v1/collections/actions/{created['id']}", headers={"X-Test-User": "stranger"}
        )
        assert r.status_code == 404

    def test_list_requires_scope(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/collections/actions")
        assert r.status_code == 400

    def test_list_invalid_sort(self, client: TestClient) -> None:
        r = client.simulate_get(
            "/v1/collections/actions", params={"applicationId": "app1", "sort": "bogus"}
        )
        assert r.status_code == 400

    @pytest.mark.parametrize("default_sort", [SortOrder.parse("-name")])
    def test_list_uses_configured_default_sort(self, client: TestClient, seeded_uow) -> None:
        seeded_uow.action_collections.add(make_collection("c1", name="Alpha"))
        seeded_uow.action_collections.add(make_collection("c2", name="Beta"))

        r = client.simulate_get("/v1/collections/actions", params={"applicationId": "app1"})
        assert [i["name"] for i in r.json["items"]] == ["Beta", "Alpha"]

        r = client.simulate_get(
            "/v1/collections/actions", params={"applicationId": "app1", "sort": "id"}
        )
        assert [i["id"] for i in r.json["items"]] == ["c1", "c2"]

    def test_list_draft_and_published(self, client: TestClient, seeded_uow) -> None:
        seeded_uow.action_collections.add(make_collection("c2", name="Beta"))
        live = make_collection("c1", name="Alpha", action_ids=("a1",))
        live.publish()
        seeded_uow.action_collections.add(live)
        seeded_uow.actions.add(make_action("a1", published=True))

        r = client.simulate_get(
            "/v1/collections/actions", params={"applicationId": "app1", "sort": "-name"}
        )
        assert r.status_code == 200
        assert [i["name"] for i in r.json["items"]] == ["Beta", "Alpha"]

        r = client.simulate_get("/v1/collections/actions/view", params={"applicationId": "app1"})
        assert r.status_code == 200
        items = r.json["items"]
        assert [i["id"] for i in items] == ["c1"]
        assert items[0]["viewMode"] == "published"
        assert [a["id"] for a in items[0]["actions"]] == ["a1"]


class TestUpdateAndDelete:
    def test_update_draft(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_put(
            f"/v1/collections/actions/{created['id']}",
            json={"name": "Helpers", "actionIds": ["a1"]},
        )
        assert r.status_code == 200
        assert r.json["name"] == "Helpers"
        assert r.json["archivedActionIds"] == ["a2"]

    def test_update_rename_only_keeps_other_fields(self, client: TestClient) -> None:
        created = _create(client, body="export default {run() {}}", defaultActionId="a1")
        r = client.simulate_put(
            f"/v1/collections/actions/{created['id']}", json={"name": "Renamed"}
        )
        assert r.status_code == 200
        assert r.json["name"] == "Renamed"
        assert r.json["actionIds"] == ["a1", "a2"]
        assert r.json["archivedActionIds"] == []
        assert r.json["body"] == "export default {run() {}}"
        assert r.json["defaultActionId"] == "a1"

    def test_update_null_name_rejected(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_put(
            f"/v1/collections/actions/{created['id']}", json={"name": None}
        )
        assert r.status_code == 400

    def test_update_missing(self, client: TestClient) -> None:
        r = client.simulate_put("/v1/collections/actions/nope", json={"name": "X"})
        assert r.status_code == 404

    def test_delete_unpublished_then_gone(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_delete(f"/v1/collections/actions/{created['id']}")
        assert r.status_code == 200
        r = client.simulate_get(f"/v1/collections/actions/{created['id']}")
        assert r.status_code == 404


class TestAttachAndPublish:
    def test_attach_to_page(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_put(
            f"/v1/collections/actions/{created['id']}/page", json={"pageId": "p1"}
        )
        assert r.status_code == 200
        assert r.json["policies"]["read:actions"] == ["u1"]

    def test_attach_missing_page_id(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_put(f"/v1/collections/actions/{created['id']}/page", json={})
        assert r.status_code == 400

    def test_publish_then_view(self, client: TestClient) -> None:
        created = _create(client)
        r = client.simulate_post("/v1/applications/app1/collections/publish")
        assert r.status_code == 200
        assert r.json["published"] == [created["id"]]

        r = client.simulate_get(
            f"/v1/collections/actions/{created['id']}", params={"viewMode": "true"}
        )
        assert r.status_code == 200
        assert r.json["viewMode"] == "published"

    def test_publish_partial_failure(self, client: TestClient, seeded_uow) -> None:
        seeded_uow.action_collections.add(make_collection("c1"))
        seeded_uow.action_collections.add(make_collection("c2", name="Broken"))
        seeded_uow.action_collections.fail_ids.add("c2")
        r = client.simulate_post("/v1/applications/app1/collections/publish")
        assert r.status_code == 207
        assert r.json["saved"] == ["c1"]
        assert r.json["failures"][0]["id"] == "c2"
        assert r.json["removed"] == []

    def test_publish_partial_failure_reports_removed(
        self, client: TestClient, seeded_uow
    ) -> None:
        gone = make_collection("c1")
        gone.publish()
        gone.unpublished = replace(gone.unpublished, deleted_at=datetime(2026, 2, 1, tzinfo=UTC))
        seeded_uow.action_collections.add(gone)
        seeded_uow.action_collections.add(make_collection("c2", name="Broken"))
        seeded_uow.action_collections.fail_ids.add("c2")

        r = client.simulate_post("/v1/applications/app1/collections/publish")
        assert r.status_code == 207
        assert r.json["removed"] == ["c1"]
        assert r.json["saved"] == []
        assert [f["id"] for f in r.json["failures"]] == ["c2"]
        assert seeded_uow.action_collections.get("c1") is None
