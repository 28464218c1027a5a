"""API Router — composes the resource routers into one explicitly built router.

Invariants:
    - build_api_router() returns a fresh APIRouter on every call (no shared instance)
    - Resource routers registered explicitly (no auto-discovery)
    - Path parameters match exactly one segment; there are no wildcard routes

Design Decisions:
    - The composed router is passed to create_app() rather than imported by it,
      so tests can start an app with any route set
"""

from fastapi import APIRouter

from bookstore.api.routes import books, health, tech_words


def build_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(health.router)
    router.include_router(books.router)
    router.include_router(tech_words.router)
    return router
