"""Service Layer — async operations that own the database session work.

Invariants:
    - Services raise AppError subclasses, never HTTP responses
    - Routes stay thin and delegate here
"""
