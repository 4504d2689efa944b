"""
Tests for the FastAPI application.
"""

from api.main import catalog_service as default_service


def create(client, **fields):
    response = client.post("/books", json=fields)
    assert response.status_code == 200
    return response.json()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Welcome" in response.text


def test_health_check(client):
    """Test health check endpoint."""
    create(client, title="Hamlet", author="Yusuf", status="reading")

    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert "version" in data
    assert data["total_books"] == 1
    assert data["books_by_status"]["reading"] == 1


def test_default_service_starts_empty():
    assert len(default_service.store) == 0


def test_create_book(client):
    data = create(client, title="Hamlet", author="Yusuf", status="reading")

    assert data == {"id": "book-1", "title": "Hamlet", "author": "Yusuf", "status": "reading"}


def test_create_book_missing_author(client, book_store):
    response = client.post("/books", json={"title": "Hamlet", "status": "reading"})

    assert response.status_code == 400
    assert response.json() == {
        "error": "missing author",
        "detail": None,
        "status_code": 400,
    }
    assert len(book_store) == 0


def test_create_book_invalid_status(client, book_store):
    response = client.post(
        "/books", json={"title": "Hamlet", "author": "Yusuf", "status": "borrowed"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid status"
    assert len(book_store) == 0


def test_create_book_with_identifier(client):
    response = client.post(
        "/books", json={"id": "mine", "title": "Hamlet", "author": "Yusuf", "status": "reading"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "identifier must not be supplied"


def test_create_book_invalid_json(client, book_store):
    response = client.post(
        "/books",
        content=b'{"title": "Incomplete", "author": "something", "status": "reading"',
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "malformed request body" in response.json()["error"]
    assert len(book_store) == 0


def test_list_books_sorted_and_filtered(client):
    create(client, title="Emma", author="Austen", status="reading")
    create(client, title="Beloved", author="Morrison", status="completed")
    create(client, title="Candide", author="Voltaire", status="reading")

    response = client.get("/books")
    assert response.status_code == 200
    assert [b["title"] for b in response.json()] == ["Beloved", "Candide", "Emma"]

    response = client.get("/books", params={"status": "reading"})
    assert [b["title"] for b in response.json()] == ["Candide", "Emma"]


def test_list_books_empty(client):
    response = client.get("/books")

    assert response.status_code == 200
    assert response.json() == []


def test_list_books_pagination_bounds(client):
    for title in ["A", "B", "C", "D", "E"]:
        create(client, title=title, author="Someone", status="unread")

    assert client.get("/books", params={"offset": 0}).status_code == 400
    assert client.get("/books", params={"offset": 5}).status_code == 400
    assert client.get("/books", params={"limit": 0}).status_code == 400
    assert client.get("/books", params={"limit": 5}).status_code == 400

    response = client.get("/books", params={"offset": 4})
    assert [b["title"] for b in response.json()] == ["E"]

    response = client.get("/books", params={"limit": 4})
    assert [b["title"] for b in response.json()] == ["A", "B", "C", "D"]

    response = client.get("/books", params={"offset": 1, "limit": 2})
    assert [b["title"] for b in response.json()] == ["B", "C"]


def test_list_books_range_error_body(client):
    create(client, title="Hamlet", author="Yusuf", status="reading")

    response = client.get("/books", params={"offset": "abc"})

    assert response.status_code == 400
    assert response.json()["error"] == "offset must be an integer"


def test_get_book(client):
    created = create(client, title="Hamlet", author="Yusuf", status="reading")

    response = client.get(f"/books/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created

    assert client.get("/books/missing").status_code == 400


def test_update_book_status(client):
    created = create(client, title="Hamlet", author="Yusuf", status="reading")

    response = client.put(f"/books/{created['id']}", json={"status": "completed"})

    assert response.status_code == 200
    assert response.json() == {**created, "status": "completed"}


def test_update_book_rejects_other_fields(client):
    created = create(client, title="Hamlet", author="Yusuf", status="reading")

    response = client.put(f"/books/{created['id']}", json={"title": "Macbeth", "status": "completed"})

    assert response.status_code == 400
    assert response.json()["error"] == "only status may be provided"
    assert client.get(f"/books/{created['id']}").json() == created


def test_update_missing_book(client):
    response = client.put("/books/missing", json={"status": "completed"})

    assert response.status_code == 400
    assert response.json()["error"] == "book does not exist"


def test_book_lifecycle(client):
    """Create, reject, update, delete, delete again."""
    created = create(client, title="Hamlet", author="Yusuf", status="reading")
    assert created["id"]

    response = client.post("/books", json={"title": "Hamlet", "status": "reading"})
    assert response.status_code == 400
    assert response.json()["error"] == "missing author"

    response = client.put(f"/books/{created['id']}", json={"status": "completed"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Hamlet"
    assert updated["author"] == "Yusuf"
    assert updated["status"] == "completed"

    response = client.delete(f"/books/{created['id']}")
    assert response.status_code == 200
    assert response.json() == updated

    response = client.delete(f"/books/{created['id']}")
    assert response.status_code == 400
    assert response.json()["error"] == "book does not exist"


def test_create_book_null_author(client, book_store):
    response = client.post(
        "/books",
        content=b'{"title": "Hamlet", "author": null, "status": "reading"}',
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "missing author"
    assert len(book_store) == 0


def test_update_book_with_null_title(client):
    created = create(client, title="Hamlet", author="Yusuf", status="reading")

    response = client.put(
        f"/books/{created['id']}",
        content=b'{"status": "completed", "title": null}',
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 200
    assert response.json() == {**created, "status": "completed"}
