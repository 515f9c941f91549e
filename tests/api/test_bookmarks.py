"""Tests for bookmark CRUD endpoints."""
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark


async def _create_category(client: AsyncClient, name: str = "Mozi") -> int:
    response = await client.post("/categories/", json={"name": name})
    assert response.status_code == 201
    return response.json()["id"]


async def test_create_bookmark(client: AsyncClient, db_session: AsyncSession) -> None:
    """Test saving a feed record as a bookmark."""
    category_id = await _create_category(client)

    response = await client.post(
        "/bookmarks/",
        json={
            "url": "http://Evil.Example.com/bins/mozi.m/",
            "threat": "malware_download",
            "reporter": "abuse_ch",
            "date_added": "2024-05-01 10:00:00 UTC",
            "status": "online",
            "tags": ["mozi", "elf"],
            "notes": "IoT botnet loader",
            "category_id": category_id,
        },
    )
    assert response.status_code == 201

    data = response.json()
    assert data["url"] == "http://evil.example.com/bins/mozi.m"
    assert data["threat"] == "malware_download"
    assert data["threat_family"] == "malware"
    assert data["reporter"] == "abuse_ch"
    assert data["date_added"] == "2024-05-01 10:00:00 UTC"
    assert data["status"] == "online"
    assert data["tags"] == ["mozi", "elf"]
    assert data["notes"] == "IoT botnet loader"
    assert data["category_id"] == category_id
    assert "id" in data
    assert "created_at" in data
    assert "updated_at" in data

    # Verify in database
    result = await db_session.execute(select(Bookmark).where(Bookmark.id == data["id"]))
    bookmark = result.scalar_one()
    assert bookmark.url == "http://evil.example.com/bins/mozi.m"


async def test_create_bookmark_minimal(client: AsyncClient) -> None:
    """Test creating a bookmark with only a URL."""
    response = await client.post("/bookmarks/", json={"url": "https://minimal.example.com"})
    assert response.status_code == 201

    data = response.json()
    assert data["url"] == "https://minimal.example.com/"
    assert data["threat"] is None
    assert data["threat_family"] == "unknown"
    assert data["tags"] is None
    assert data["category_id"] is None


async def test_create_bookmark_missing_url(client: AsyncClient) -> None:
    """Test that a missing URL returns 400 MissingURL."""
    response = await client.post("/bookmarks/", json={"threat": "phishing"})
    assert response.status_code == 400
    assert response.json() == {"detail": "URL is required", "error": "MissingURL"}


async def test_create_bookmark_invalid_url(client: AsyncClient) -> None:
    """Test that invalid URLs return 400 with the failure kind."""
    cases = {
        "   ": "EmptyURL",
        "not a url": "MalformedURL",
        "ftp://host/x": "UnsupportedScheme",
        "http://": "MissingHost",
        "http://example.com/" + "a" * 2100: "TooLong",
    }
    for url, kind in cases.items():
        response = await client.post("/bookmarks/", json={"url": url})
        assert response.status_code == 400, url
        assert response.json()["error"] == kind


async def test_create_bookmark_duplicate(client: AsyncClient) -> None:
    """Test that saving a normalized duplicate returns 409."""
    first = await client.post("/bookmarks/", json={"url": "http://Example.com/a/"})
    assert first.status_code == 201

    response = await client.post("/bookmarks/", json={"url": "http://example.com/a"})
    assert response.status_code == 409
    assert response.json() == {"detail": "URL already bookmarked", "error": "DuplicateURL"}

    listing = await client.get("/bookmarks/")
    assert len(listing.json()["bookmarks"]) == 1


async def test_create_bookmark_unknown_category(client: AsyncClient) -> None:
    """Test that an unknown category id returns 404."""
    response = await client.post(
        "/bookmarks/", json={"url": "https://example.com/", "category_id": 999},
    )
    assert response.status_code == 404
    assert response.json() == {"detail": "Category not found", "error": "NotFound"}


async def test_create_bookmark_rejects_non_list_tags(client: AsyncClient) -> None:
    """Test that a malformed request body is a request validation error."""
    response = await client.post(
        "/bookmarks/", json={"url": "https://example.com/", "tags": "not-a-list"},
    )
    assert response.status_code == 422


async def test_list_bookmarks(client: AsyncClient) -> None:
    """Test listing bookmarks newest first."""
    for i in range(3):
        await client.post("/bookmarks/", json={"url": f"https://example{i}.com"})

    response = await client.get("/bookmarks/")
    assert response.status_code == 200

    urls = [b["url"] for b in response.json()["bookmarks"]]
    assert urls == [
        "https://example2.com/",
        "https://example1.com/",
        "https://example0.com/",
    ]


async def test_list_bookmarks_empty(client: AsyncClient) -> None:
    response = await client.get("/bookmarks/")
    assert response.status_code == 200
    assert response.json() == {"bookmarks": []}


async def test_get_bookmark(client: AsyncClient) -> None:
    """Test getting a single bookmark."""
    create_response = await client.post(
        "/bookmarks/", json={"url": "https://get-test.com", "threat": "phishing"},
    )
    bookmark_id = create_response.json()["id"]

    response = await client.get(f"/bookmarks/{bookmark_id}")
    assert response.status_code == 200
    assert response.json()["url"] == "https://get-test.com/"
    assert response.json()["threat_family"] == "phishing"


async def test_get_bookmark_not_found(client: AsyncClient) -> None:
    """Test getting a non-existent bookmark returns 404."""
    response = await client.get("/bookmarks/99999")
    assert response.status_code == 404
    assert response.json() == {"detail": "Bookmark not found", "error": "NotFound"}


async def test_update_bookmark(client: AsyncClient) -> None:
    """Test that update replaces every field."""
    create_response = await client.post(
        "/bookmarks/",
        json={
            "url": "https://update-test.com",
            "threat": "malware_download",
            "tags": ["a"],
            "notes": "old",
        },
    )
    bookmark_id = create_response.json()["id"]

    response = await client.patch(
        f"/bookmarks/{bookmark_id}",
        json={"url": "https://update-test.com", "status": "offline", "notes": "new"},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == bookmark_id
    assert data["status"] == "offline"
    assert data["notes"] == "new"
    assert data["threat"] is None
    assert data["tags"] is None


async def test_update_bookmark_not_found(client: AsyncClient) -> None:
    """Test updating a non-existent bookmark returns 404."""
    response = await client.patch(
        "/bookmarks/99999", json={"url": "https://nowhere.example.com/"},
    )
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


async def test_update_bookmark_not_found_without_url(client: AsyncClient) -> None:
    """Test that a missing id is reported before a missing URL."""
    response = await client.patch("/bookmarks/99999", json={"notes": "x"})
    assert response.status_code == 404
    assert response.json() == {"detail": "Bookmark not found", "error": "NotFound"}


async def test_update_bookmark_duplicate_url(client: AsyncClient) -> None:
    """Test that moving a bookmark onto another's URL returns 409."""
    await client.post("/bookmarks/", json={"url": "https://taken.example.com/"})
    other = await client.post("/bookmarks/", json={"url": "https://free.example.com/"})

    response = await client.patch(
        f"/bookmarks/{other.json()['id']}", json={"url": "https://TAKEN.example.com"},
    )
    assert response.status_code == 409


async def test_update_bookmark_invalid_url(client: AsyncClient) -> None:
    """Test that update validates the URL."""
    created = await client.post("/bookmarks/", json={"url": "https://ok.example.com/"})

    response = await client.patch(
        f"/bookmarks/{created.json()['id']}", json={"url": "javascript:alert(1)"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "UnsupportedScheme"


async def test_delete_bookmark(client: AsyncClient) -> None:
    """Test deleting a bookmark."""
    create_response = await client.post("/bookmarks/", json={"url": "https://delete-me.com"})
    bookmark_id = create_response.json()["id"]

    response = await client.delete(f"/bookmarks/{bookmark_id}")
    assert response.status_code == 204

    response = await client.get(f"/bookmarks/{bookmark_id}")
    assert response.status_code == 404


async def test_delete_bookmark_not_found(client: AsyncClient) -> None:
    """Test deleting a non-existent bookmark returns 404."""
    response = await client.delete("/bookmarks/99999")
    assert response.status_code == 404


async def test_bookmark_responses_carry_security_headers(client: AsyncClient) -> None:
    """Test that responses include the security headers."""
    response = await client.get("/bookmarks/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "X-RateLimit-Limit" not in response.headers
