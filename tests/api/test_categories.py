"""Tests for category CRUD endpoints."""
from httpx import AsyncClient


async def test_create_category(client: AsyncClient) -> None:
    response = await client.post("/categories/", json={"name": "  Phishing kits "})
    assert response.status_code == 201

    data = response.json()
    assert data["name"] == "Phishing kits"
    assert "id" in data
    assert "created_at" in data


async def test_create_category_blank_name(client: AsyncClient) -> None:
    """Test that a blank or missing name returns 400 EmptyName."""
    for body in ({"name": "   "}, {}):
        response = await client.post("/categories/", json=body)
        assert response.status_code == 400
        assert response.json() == {"detail": "Category name is required", "error": "EmptyName"}


async def test_list_categories(client: AsyncClient) -> None:
    """Test listing categories newest first."""
    for name in ["one", "two"]:
        await client.post("/categories/", json={"name": name})

    response = await client.get("/categories/")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()["categories"]] == ["two", "one"]


async def test_rename_category(client: AsyncClient) -> None:
    created = await client.post("/categories/", json={"name": "old"})
    category_id = created.json()["id"]

    response = await client.patch(f"/categories/{category_id}", json={"name": "new"})
    assert response.status_code == 200
    assert response.json()["name"] == "new"
    assert response.json()["id"] == category_id


async def test_rename_category_not_found(client: AsyncClient) -> None:
    response = await client.patch("/categories/999", json={"name": "x"})
    assert response.status_code == 404
    assert response.json() == {"detail": "Category not found", "error": "NotFound"}


async def test_rename_category_blank_name(client: AsyncClient) -> None:
    created = await client.post("/categories/", json={"name": "keep"})

    response = await client.patch(f"/categories/{created.json()['id']}", json={"name": ""})
    assert response.status_code == 400
    assert response.json()["error"] == "EmptyName"


async def test_delete_category_keeps_bookmarks(client: AsyncClient) -> None:
    """Test that deleting a category leaves its bookmarks uncategorized."""
    created = await client.post("/categories/", json={"name": "Emotet"})
    category_id = created.json()["id"]
    bookmark_ids = []
    for url in ["http://a.example/x.doc", "http://b.example/y.doc"]:
        response = await client.post(
            "/bookmarks/", json={"url": url, "category_id": category_id},
        )
        bookmark_ids.append(response.json()["id"])

    response = await client.delete(f"/categories/{category_id}")
    assert response.status_code == 204

    for bookmark_id in bookmark_ids:
        response = await client.get(f"/bookmarks/{bookmark_id}")
        assert response.status_code == 200
        assert response.json()["category_id"] is None

    categories = await client.get("/categories/")
    assert categories.json()["categories"] == []


async def test_delete_category_not_found(client: AsyncClient) -> None:
    response = await client.delete("/categories/999")
    assert response.status_code == 404
