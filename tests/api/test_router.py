"""Tests for build_api_router — explicit composition, no shared instance.

Routes are read back from a mounted app's OpenAPI paths, which reflect what
the app actually serves whatever the router keeps internally.
"""

from fastapi import APIRouter, FastAPI

from bookstore.api.router import build_api_router


def _routes(router: APIRouter) -> set[tuple[str, str]]:
    app = FastAPI()
    app.include_router(router)
    return {
        (method.upper(), path)
        for path, operations in app.openapi()["paths"].items()
        for method in operations
    }


def test_each_call_builds_a_new_router():
    assert build_api_router() is not build_api_router()


def test_all_resources_registered():
    routes = _routes(build_api_router())
    assert ("GET", "/api/v1/health/") in routes
    assert ("GET", "/api/v1/health/ready") in routes
    assert ("GET", "/api/v1/books") in routes
    assert ("POST", "/api/v1/books") in routes
    assert ("GET", "/api/v1/books/{book_id}") in routes
    assert ("PATCH", "/api/v1/books/{book_id}") in routes
    assert ("DELETE", "/api/v1/books/{book_id}") in routes
    assert ("GET", "/api/v1/guess") in routes


def test_routers_do_not_share_route_lists():
    first = build_api_router()
    second = build_api_router()
    first.add_api_route("/extra", lambda: {}, methods=["GET"])
    assert ("GET", "/extra") in _routes(first)
    assert ("GET", "/extra") not in _routes(second)
