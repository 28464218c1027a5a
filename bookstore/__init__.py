"""Bookstore API Package — JSON API with centralized error handling.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
