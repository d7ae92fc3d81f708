"""HTTP tests for the /api/books routes."""
from bson import ObjectId
from fastapi.testclient import TestClient

from book_catalog.main import create_app


def test_end_to_end_create_then_list(client):
    assert client.get("/api/books").json() == []

    payload = {"name": "Dune", "author": "Herbert", "pages": 412, "year": 1965}
    r = client.post("/api/books", json=payload)
    assert r.status_code == 200
    assert r.content == b""

    r = client.get("/api/books")
    assert r.status_code == 200
    books = r.json()
    assert len(books) == 1
    book = books[0]
    assert ObjectId.is_valid(book.pop("id"))
    # isbn was empty, so it is omitted
    assert book == payload


def test_list_includes_isbn_when_set(client, dune):
    books = client.get("/api/books").json()
    assert books == [
        {
            "id": str(dune),
            "name": "Dune",
            "author": "Herbert",
            "isbn": "0441013597",
            "pages": 412,
            "year": 1965,
        }
    ]


def test_list_store_failure(client, store):
    store.fail = True
    r = client.get("/api/books")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch books"}


def test_create_adds_exactly_one_record(client, dune):
    before = client.get("/api/books").json()
    r = client.post(
        "/api/books",
        json={"name": "Emma", "author": "Austen", "isbn": "x-1", "pages": 474, "year": 1815},
    )
    assert r.status_code == 200
    after = client.get("/api/books").json()
    assert len(after) == len(before) + 1
    added = [b for b in after if b["id"] != str(dune)]
    assert added[0]["name"] == "Emma"
    assert added[0]["isbn"] == "x-1"


def test_create_accepts_empty_and_negative_values(client):
    r = client.post("/api/books", json={"name": "", "pages": -5})
    assert r.status_code == 200
    books = client.get("/api/books").json()
    assert books[0]["name"] == ""
    assert books[0]["author"] == ""
    assert books[0]["pages"] == -5


def test_create_malformed_body(client, store):
    r = client.post(
        "/api/books",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
    assert "insert_one" not in store.calls


def test_create_wrong_type(client, store):
    r = client.post("/api/books", json={"name": "Dune", "pages": "412"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
    assert "insert_one" not in store.calls


def test_create_rejects_integers_outside_int64(client, store):
    r = client.post("/api/books", json={"name": "Dune", "pages": 2 ** 70})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
    assert "insert_one" not in store.calls


def test_create_accepts_int64_bounds(client):
    r = client.post("/api/books", json={"pages": 2 ** 63 - 1, "year": -(2 ** 63)})
    assert r.status_code == 200
    assert client.get("/api/books").json()[0]["pages"] == 2 ** 63 - 1


def test_create_null_fields_take_zero_values(client):
    r = client.post("/api/books", json={"name": "Dune", "isbn": None, "pages": None})
    assert r.status_code == 200
    book = client.get("/api/books").json()[0]
    assert book["name"] == "Dune"
    assert book["pages"] == 0
    assert "isbn" not in book


def test_create_store_failure(client, store):
    store.fail = True
    r = client.post("/api/books", json={"name": "Dune"})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to add book"}


def test_update_year_only(client, store, dune):
    r = client.put("/api/books", json={"id": str(dune), "year": 1966})
    assert r.status_code == 200
    assert r.json() == {"message": "Book updated successfully"}

    record = store.get(dune)
    assert record.year == 1966
    assert record.name == "Dune"
    assert record.author == "Herbert"
    assert record.isbn == "0441013597"
    assert record.pages == 412


def test_update_pages_zero_is_ignored(client, store, dune):
    r = client.put("/api/books", json={"id": str(dune), "pages": 0})
    assert r.status_code == 200
    assert store.get(dune).pages == 412


def test_update_accepts_uppercase_id_key(client, store, dune):
    r = client.put("/api/books", json={"ID": str(dune), "name": "Dune Messiah"})
    assert r.status_code == 200
    assert store.get(dune).name == "Dune Messiah"


def test_update_unknown_id_still_succeeds(client):
    r = client.put("/api/books", json={"id": str(ObjectId()), "name": "Ghost"})
    assert r.status_code == 200
    assert r.json() == {"message": "Book updated successfully"}


def test_update_missing_id(client, store):
    r = client.put("/api/books", json={"name": "Dune"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid book ID"}
    assert "update_one" not in store.calls


def test_update_zero_id(client):
    r = client.put("/api/books", json={"id": "0" * 24, "name": "Dune"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid book ID"}


def test_update_malformed_id(client):
    r = client.put("/api/books", json={"id": "not-an-id", "name": "Dune"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}


def test_update_rejects_integers_outside_int64(client, store, dune):
    r = client.put("/api/books", json={"id": str(dune), "year": 2 ** 64})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
    assert "update_one" not in store.calls
    assert store.get(dune).year == 1965


def test_update_null_field_is_left_unchanged(client, store, dune):
    r = client.put("/api/books", json={"id": str(dune), "author": None, "year": 1966})
    assert r.status_code == 200
    record = store.get(dune)
    assert record.author == "Herbert"
    assert record.year == 1966


def test_update_empty_id(client, store):
    r = client.put("/api/books", json={"id": "", "name": "Dune"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid book ID"}
    assert "update_one" not in store.calls


def test_update_store_failure(client, store, dune):
    store.fail = True
    r = client.put("/api/books", json={"id": str(dune), "year": 2000})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to update book"}


def test_delete_twice(client, dune):
    r = client.delete(f"/api/books/{dune}")
    assert r.status_code == 200
    assert r.json() == {"message": "Book deleted successfully"}

    r = client.delete(f"/api/books/{dune}")
    assert r.status_code == 404
    assert r.json() == {"error": "Book not found"}


def test_delete_unknown_id_leaves_collection_unchanged(client, dune):
    before = client.get("/api/books").json()
    r = client.delete(f"/api/books/{ObjectId()}")
    assert r.status_code == 404
    assert client.get("/api/books").json() == before


def test_delete_invalid_id_never_reaches_store(client, store):
    r = client.delete("/api/books/xyz")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid book ID"}
    assert "delete_one" not in store.calls


def test_delete_store_failure(client, store, dune):
    store.fail = True
    r = client.delete(f"/api/books/{dune}")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to delete book"}


def test_single_operation_service_mounts_only_its_route(store):
    client = TestClient(create_app(store=store, service="delete"))
    assert client.get("/api/books").status_code == 404
    assert client.get("/books").status_code == 404
    assert client.get(f"/api/books/{ObjectId()}").status_code == 405
    assert client.delete(f"/api/books/{ObjectId()}").status_code == 404


def test_list_service(store, dune):
    client = TestClient(create_app(store=store, service="list"))
    r = client.get("/api/books")
    assert r.status_code == 200
    assert [b["id"] for b in r.json()] == [str(dune)]
    assert client.post("/api/books", json={}).status_code == 405


def test_unhandled_error_is_logged_as_500(store, caplog):
    def broken():
        raise RuntimeError("cursor exploded")

    store.find_all = broken
    client = TestClient(create_app(store=store, service="list"), raise_server_exceptions=False)
    r = client.get("/api/books")
    assert r.status_code == 500
    assert "GET /api/books -> 500" in caplog.text
