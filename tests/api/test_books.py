"""Books routes — CRUD, list features, and error envelopes end to end.

Invariants:
    - Success bodies carry "status": "success"
    - Missing id → 404 fail, malformed id → 400 fail, duplicate name → 400 fail
    - List honours filter / sort / fields / page / limit
"""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

from bookstore.models.book import Book


async def _create(client, payload):
    res = await client.post("/api/v1/books", json=payload)
    assert res.status_code == 201, res.text
    return res.json()["data"]["book"]


async def test_create_book_returns_201(client, book_payload):
    res = await client.post("/api/v1/books", json=book_payload())
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "success"
    book = body["data"]["book"]
    assert book["name"] == "The Pragmatic Programmer"
    assert book["in_stock"] is True
    assert book["rating"] == 0
    assert book["id"]


async def test_create_book_persists_row(client, book_payload, test_db):
    created = await _create(client, book_payload())
    row = await test_db.get(Book, UUID(created["id"]))
    assert row is not None
    assert row.author == "Andrew Hunt"


async def test_create_book_missing_fields_is_400_fail(client):
    res = await client.post("/api/v1/books", json={"name": "Only a name"})
    assert res.status_code == 400
    body = res.json()
    assert body["status"] == "fail"
    assert "price: Field required" in body["message"]
    assert "author: Field required" in body["message"]


async def test_duplicate_name_is_400_fail(client, book_payload):
    await _create(client, book_payload(name="Dune"))
    res = await client.post("/api/v1/books", json=book_payload(name="Dune"))
    assert res.status_code == 400
    assert res.json() == {
        "status": "fail",
        "message": "Book with Dune name already exists in database",
    }


async def test_get_single_book(client, book_payload):
    created = await _create(client, book_payload())
    res = await client.get(f"/api/v1/books/{created['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["book"] == created


async def test_get_unknown_book_is_404_fail(client):
    book_id = uuid4()
    res = await client.get(f"/api/v1/books/{book_id}")
    assert res.status_code == 404
    assert res.json() == {"status": "fail", "message": f"No book found with id {book_id}"}


async def test_get_malformed_id_is_400_fail(client):
    res = await client.get("/api/v1/books/not-a-uuid")
    assert res.status_code == 400
    assert res.json() == {"status": "fail", "message": "Invalid id: not-a-uuid"}


async def test_update_book(client, book_payload):
    created = await _create(client, book_payload())
    res = await client.patch(
        f"/api/v1/books/{created['id']}", json={"price": 19.99, "in_stock": False},
    )
    assert res.status_code == 200
    book = res.json()["data"]["book"]
    assert book["price"] == 19.99
    assert book["in_stock"] is False
    assert book["name"] == created["name"]


async def test_update_rejects_null_required_field(client, book_payload):
    created = await _create(client, book_payload())
    res = await client.patch(f"/api/v1/books/{created['id']}", json={"name": None})
    assert res.status_code == 400
    assert res.json()["status"] == "fail"
    assert "name cannot be null" in res.json()["message"]


async def test_update_to_existing_name_is_400_fail(client, book_payload):
    await _create(client, book_payload(name="Dune"))
    other = await _create(client, book_payload(name="Emma"))
    res = await client.patch(f"/api/v1/books/{other['id']}", json={"name": "Dune"})
    assert res.status_code == 400
    assert res.json()["message"] == "Book with Dune name already exists in database"


async def test_update_unknown_book_is_404(client):
    res = await client.patch(f"/api/v1/books/{uuid4()}", json={"price": 1})
    assert res.status_code == 404


async def test_delete_book_returns_204_then_404(client, book_payload):
    created = await _create(client, book_payload())
    res = await client.delete(f"/api/v1/books/{created['id']}")
    assert res.status_code == 204
    assert res.content == b""
    res = await client.get(f"/api/v1/books/{created['id']}")
    assert res.status_code == 404


async def test_delete_malformed_id_is_400(client):
    res = await client.delete("/api/v1/books/123")
    assert res.status_code == 400


# --- List features ----------------------------------------------------------

async def _seed_three(client, book_payload):
    await _create(client, book_payload(name="Cheap", price=5, pages=100))
    await _create(client, book_payload(name="Middle", price=20, pages=250, in_stock=False))
    await _create(client, book_payload(name="Pricey", price=60, pages=900))


async def test_list_books_envelope(client, book_payload):
    await _seed_three(client, book_payload)
    res = await client.get("/api/v1/books")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert body["results"] == 3
    assert len(body["data"]["books"]) == 3
    requested_at = datetime.fromisoformat(body["requestedAt"])
    assert requested_at.utcoffset() == timedelta(0)


async def test_list_books_empty(client):
    res = await client.get("/api/v1/books")
    assert res.json()["results"] == 0
    assert res.json()["data"] == {"books": []}


async def test_list_sorted_ascending_and_descending(client, book_payload):
    await _seed_three(client, book_payload)
    res = await client.get("/api/v1/books", params={"sort": "price"})
    assert [b["name"] for b in res.json()["data"]["books"]] == ["Cheap", "Middle", "Pricey"]
    res = await client.get("/api/v1/books", params={"sort": "-price"})
    assert [b["name"] for b in res.json()["data"]["books"]] == ["Pricey", "Middle", "Cheap"]


async def test_list_filters_by_comparison(client, book_payload):
    await _seed_three(client, book_payload)
    res = await client.get(
        "/api/v1/books", params={"price[gte]": "20", "sort": "price"},
    )
    assert [b["name"] for b in res.json()["data"]["books"]] == ["Middle", "Pricey"]


async def test_list_filters_by_equality(client, book_payload):
    await _seed_three(client, book_payload)
    res = await client.get("/api/v1/books", params={"in_stock": "false"})
    assert [b["name"] for b in res.json()["data"]["books"]] == ["Middle"]


async def test_list_field_projection(client, book_payload):
    await _seed_three(client, book_payload)
    res = await client.get("/api/v1/books", params={"fields": "name,price"})
    for book in res.json()["data"]["books"]:
        assert set(book) == {"id", "name", "price"}


async def test_list_pagination(client, book_payload):
    await _seed_three(client, book_payload)
    res = await client.get(
        "/api/v1/books", params={"sort": "price", "page": "2", "limit": "1"},
    )
    body = res.json()
    assert body["results"] == 1
    assert body["data"]["books"][0]["name"] == "Middle"


async def test_list_invalid_sort_field_is_400_fail(client):
    res = await client.get("/api/v1/books", params={"sort": "nope"})
    assert res.status_code == 400
    assert res.json() == {"status": "fail", "message": "Invalid sort field: nope"}


async def test_list_invalid_filter_value_is_400_fail(client):
    res = await client.get("/api/v1/books", params={"price[lt]": "cheap"})
    assert res.status_code == 400
    assert res.json() == {"status": "fail", "message": "Invalid value for price: cheap"}


async def test_list_filter_on_json_field_rejected(client):
    res = await client.get("/api/v1/books", params={"genre": "Software"})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid filter field: genre"
