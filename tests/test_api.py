"""HTTP surface tests against an in-memory, seeded wardrobe."""

from __future__ import annotations

import random

import pytest
from fastapi.testclient import TestClient

from server.api import create_app
from wardrobe_app.app import WardrobeApp
from wardrobe_app.config import AppConfig


@pytest.fixture()
def client() -> TestClient:
    wardrobe = WardrobeApp(config=AppConfig(snapshot_backend="memory"), rng=random.Random(1))
    return TestClient(create_app(wardrobe))


def test_healthcheck_reports_backend(client: TestClient) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["snapshot_backend"] == "memory"


def test_list_items_with_category_filter(client: TestClient) -> None:
    assert len(client.get("/items").json()) == 8
    shoes = client.get("/items", params={"category": "shoes"}).json()
    assert sorted(item["item_id"] for item in shoes) == ["5", "6"]


def test_add_item_and_reject_unknown_category(client: TestClient) -> None:
    created = client.post("/items", json={"name": "Linen Shirt", "category": "top", "colors": ["white"]})
    assert created.status_code == 201
    assert created.json()["category"] == "tops"
    assert created.json()["times_worn"] == 0

    rejected = client.post("/items", json={"name": "Cap", "category": "hats"})
    assert rejected.status_code == 422
    assert len(client.get("/items").json()) == 9


def test_update_and_missing_item(client: TestClient) -> None:
    updated = client.patch("/items/1", json={"brand": "Muji"})
    assert updated.status_code == 200
    assert updated.json()["brand"] == "Muji"
    assert updated.json()["times_worn"] == 12

    assert client.patch("/items/missing", json={"brand": "Muji"}).status_code == 404
    assert client.get("/items/missing").status_code == 404
    assert client.delete("/items/missing").status_code == 404


def test_wearing_outfit_updates_items(client: TestClient) -> None:
    worn = client.post("/outfits/1/wear")

    assert worn.status_code == 200
    assert worn.json()["times_worn"] == 6
    assert client.get("/items/5").json()["times_worn"] == 31
    assert client.get("/items/5").json()["last_worn"] == worn.json()["last_worn"]
    assert client.get("/outfits/recent", params={"limit": 1}).json()[0]["outfit_id"] == "1"


def test_toggle_favorite_item(client: TestClient) -> None:
    assert client.post("/items/3/favorite").json()["favorite"] is True
    assert client.post("/items/3/favorite").json()["favorite"] is False


def test_outfit_items_skip_removed_items(client: TestClient) -> None:
    names = [item["name"] for item in client.get("/outfits/2/items").json()]
    assert names == ["Black Blazer", "Blue Jeans", "Black Dress Shoes"]

    assert client.delete("/items/3").status_code == 200
    assert len(client.get("/outfits/2/items").json()) == 2
    assert client.get("/outfits/2").json()["items"] == ["3", "2", "6"]


def test_plans_by_date_and_invalid_date(client: TestClient) -> None:
    plans = client.get("/plans", params={"date": "2025-05-27"}).json()
    assert [plan["outfit_id"] for plan in plans] == ["2"]
    assert client.get("/plans", params={"date": "2025-05-28"}).json() == []

    created = client.post("/plans", json={"date": "2025-06-02", "outfit_id": "4", "event": "Picnic"})
    assert created.status_code == 201
    assert client.post("/plans", json={"date": "tomorrow", "outfit_id": "4"}).status_code == 422

    moved = client.patch(f"/plans/{created.json()['plan_id']}", json={"date": "2025-06-03"})
    assert moved.json()["date"] == "2025-06-03"

    fetched = client.get(f"/plans/{created.json()['plan_id']}")
    assert fetched.status_code == 200
    assert fetched.json()["event"] == "Picnic"
    assert client.get("/plans/missing").status_code == 404


def test_photo_lifecycle(client: TestClient) -> None:
    uri = "file:///photos/look-1.jpg"

    assert client.post("/photos", json={"uri": uri}).json() == [uri]
    assert client.get("/photos").json() == [uri]
    assert client.delete("/photos", params={"uri": uri}).status_code == 200
    assert client.delete("/photos", params={"uri": uri}).status_code == 404


def test_stats(client: TestClient) -> None:
    stats = client.get("/stats").json()

    assert stats["item_count"] == 8
    assert stats["outfit_count"] == 4
    assert stats["planned_count"] == 3


def test_recommendation_without_enough_items_is_not_usable(client: TestClient) -> None:
    body = client.post("/recommendations", json={"occasion": "formal", "season": "summer", "save": True}).json()

    assert body["item_ids"] == ["6"]
    assert body["usable"] is False
    assert body["saved_outfit"] is None


def test_recommendation_can_be_saved(client: TestClient) -> None:
    body = client.post(
        "/recommendations",
        json={"occasion": "casual", "season": "summer", "weather": "sunny", "mood": "relaxed", "save": True},
    ).json()

    assert body["usable"] is True
    assert [item["item_id"] for item in body["items"]] == body["item_ids"]
    saved = body["saved_outfit"]
    assert saved["name"] == "Casual Outfit"
    assert saved["items"] == body["item_ids"]
    assert saved["notes"] == "Generated for sunny weather with a relaxed mood."
    assert client.get("/stats").json()["outfit_count"] == 5


def test_image_analysis_prefills_draft(client: TestClient) -> None:
    body = client.post("/analysis/image", json={"image_uri": "file:///photos/red-summer-dress.jpg"}).json()

    assert body["analysis"]["category"] == "dresses"
    assert body["analysis"]["colors"] == ["red"]
    assert body["draft"]["category"] == "dresses"
    assert body["draft"]["image_uri"] == "file:///photos/red-summer-dress.jpg"
