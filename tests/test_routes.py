from bookstore.catalog import books_router, reviews_router


def route_index(router, path, method="GET"):
    for index, route in enumerate(router.routes):
        if route.path == path and method in route.methods:
            return index
    raise AssertionError(f"{method} {path} is not registered")


def test_literal_book_routes_precede_id_route():
    id_route = route_index(books_router, "/api/books/{book_id}")
    for literal in ("featured", "search", "top-rated", "date-range"):
        assert route_index(books_router, f"/api/books/{literal}") < id_route


def test_every_table_route_is_registered():
    expected = [
        (books_router, "GET", "/api/books"),
        (books_router, "POST", "/api/books"),
        (books_router, "PUT", "/api/books/{book_id}"),
        (books_router, "PATCH", "/api/books/{book_id}"),
        (books_router, "DELETE", "/api/books/{book_id}"),
        (reviews_router, "GET", "/api/reviews"),
        (reviews_router, "GET", "/api/reviews/book/{book_id}"),
        (reviews_router, "POST", "/api/reviews"),
        (reviews_router, "PUT", "/api/reviews/{review_id}"),
        (reviews_router, "DELETE", "/api/reviews/{review_id}"),
    ]
    for router, method, path in expected:
        route_index(router, path, method)
