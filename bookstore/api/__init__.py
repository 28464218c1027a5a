"""API Layer — FastAPI routes, router composition, middleware and error handlers.

Invariants:
    - All endpoints return application/json
    - Every error leaves through error_handlers as a {status, message} envelope
"""
