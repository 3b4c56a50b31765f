"""
tests/test_categories_routes.py -- Integration tests for the /categories routes.

Coverage:
  - POST 201 "Category added", GET detail, GET list, GET 404
  - create_at / update_at default to the insert time
  - PUT changes fields but leaves update_at alone
  - PUT / DELETE on unknown ids still answer 200
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi.testclient import TestClient


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCategoryRoutes:
    def test_list_empty(self, api_client: TestClient) -> None:
        resp = api_client.get("/categories")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_create_and_get(self, api_client: TestClient) -> None:
        resp = api_client.post("/categories", json={"id": "c1", "category_name": "Floral"})
        assert resp.status_code == 201
        assert resp.text == "Category added"

        data = api_client.get("/categories/c1").json()
        assert data["id"] == "c1"
        assert data["category_name"] == "Floral"
        assert data["create_at"] == data["update_at"]

    def test_default_timestamps_are_recent(self, api_client: TestClient) -> None:
        before = datetime.now(timezone.utc).replace(microsecond=0)
        api_client.post("/categories", json={"id": "c1", "category_name": "Floral"})
        created = _parse(api_client.get("/categories/c1").json()["create_at"])
        assert created >= before

    def test_explicit_timestamps_round_trip(self, api_client: TestClient) -> None:
        body = {
            "id": "c2",
            "category_name": "Woody",
            "create_at": "2024-01-01T00:00:00Z",
            "update_at": "2024-02-01T00:00:00Z",
        }
        api_client.post("/categories", json=body)
        data = api_client.get("/categories/c2").json()
        assert _parse(data["create_at"]) == _parse(body["create_at"])
        assert _parse(data["update_at"]) == _parse(body["update_at"])

    def test_numeric_id_is_cast(self, api_client: TestClient) -> None:
        resp = api_client.post("/categories", json={"id": 5, "category_name": "Amber"})
        assert resp.status_code == 201
        data = api_client.get("/categories/5").json()
        assert data["id"] == "5"
        assert data["category_name"] == "Amber"

    def test_get_unknown_category(self, api_client: TestClient) -> None:
        resp = api_client.get("/categories/nope")
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Category not found"

    def test_update_keeps_update_at(self, api_client: TestClient) -> None:
        api_client.post("/categories", json={"id": "c1", "category_name": "Floral"})
        original = api_client.get("/categories/c1").json()

        resp = api_client.put("/categories/c1", json={"category_name": "Citrus"})
        assert resp.status_code == 200
        assert resp.text == "Category updated"

        updated = api_client.get("/categories/c1").json()
        assert updated["category_name"] == "Citrus"
        assert updated["update_at"] == original["update_at"]

    def test_update_unknown_id_reports_success(self, api_client: TestClient) -> None:
        resp = api_client.put("/categories/ghost", json={"category_name": "x"})
        assert resp.status_code == 200
        assert api_client.get("/categories").json() == []

    def test_delete(self, api_client: TestClient) -> None:
        api_client.post("/categories", json={"id": "c1", "category_name": "Floral"})
        resp = api_client.delete("/categories/c1")
        assert resp.status_code == 200
        assert resp.text == "Category deleted"
        assert api_client.get("/categories/c1").status_code == 404

    def test_delete_unknown_id_reports_success(self, api_client: TestClient) -> None:
        assert api_client.delete("/categories/ghost").status_code == 200

    def test_products_and_categories_do_not_mix(self, api_client: TestClient) -> None:
        api_client.post("/products", json={"id": "x1", "title": "Rose"})
        assert api_client.get("/categories/x1").status_code == 404
