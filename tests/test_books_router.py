"""Tests for the /api/books endpoints."""


def test_list_books_envelope(client):
    response = client.get("/api/books")

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"books", "currentPage", "totalItems", "totalPages"}
    assert data["currentPage"] == 0
    assert data["totalItems"] == 5
    assert data["totalPages"] == 1
    assert data["books"][0]["title"] == "A Brief History of Time"


def test_list_books_with_page_and_size(client):
    data = client.get("/api/books", params={"page": 2, "size": 2}).json()

    assert [b["title"] for b in data["books"]] == ["The Hobbit"]
    assert data["currentPage"] == 2
    assert data["totalPages"] == 3


def test_list_books_past_last_page(client):
    data = client.get("/api/books", params={"page": 10}).json()

    assert data["books"] == []
    assert data["totalItems"] == 5
    assert data["totalPages"] == 1


def test_list_books_clamps_negative_page_and_zero_size(client):
    data = client.get("/api/books", params={"page": -1, "size": 0}).json()

    assert data["currentPage"] == 0
    assert len(data["books"]) == 5


def test_list_books_rejects_non_integer_page(client):
    assert client.get("/api/books", params={"page": "first"}).status_code == 422


def test_get_book_by_id(client):
    response = client.get("/api/books/2")

    assert response.status_code == 200
    book = response.json()
    assert book["id"] == 2
    assert book["title"] == "Dune"
    assert book["price"] == 9.99
    assert book["imageUrl"] == "https://images.example.com/dune.jpg"
    assert book["publicationYear"] is None


def test_get_unknown_book_is_404(client):
    response = client.get("/api/books/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Book with ID 999 not found"


def test_search(client):
    data = client.get("/api/books/search", params={"query": "gibson"}).json()

    assert [b["title"] for b in data["books"]] == ["Neuromancer"]
    assert data["totalItems"] == 1


def test_search_by_isbn_fragment(client):
    data = client.get("/api/books/search", params={"query": "9780441", "size": 1}).json()

    assert data["totalItems"] == 2
    assert data["totalPages"] == 2
    assert [b["title"] for b in data["books"]] == ["Dune"]


def test_search_without_match(client):
    data = client.get("/api/books/search", params={"query": "xyzzy"}).json()

    assert data == {"books": [], "currentPage": 0, "totalItems": 0, "totalPages": 0}


def test_search_requires_query(client):
    assert client.get("/api/books/search").status_code == 422


def test_category(client):
    data = client.get("/api/books/category/FICTION").json()

    assert [b["title"] for b in data["books"]] == ["Dune", "Neuromancer"]
    assert data["totalItems"] == 2


def test_category_with_space(client):
    data = client.get("/api/books/category/science fiction").json()

    assert data["totalItems"] == 2


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_db_health_reports_book_count(client):
    data = client.get("/health/db").json()

    assert data["status"] == "connected"
    assert data["books"] == 5


def test_list_books_huge_page_index(client):
    data = client.get("/api/books", params={"page": 10**17, "size": 100}).json()

    assert data["books"] == []
    assert data["totalItems"] == 5
    assert data["totalPages"] == 1
