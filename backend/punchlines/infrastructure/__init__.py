"""Infrastructure Layer - database session management and logging setup.

Invariants:
    - Infrastructure never imports from core/ game logic (errors excepted)
    - Driver exceptions are mapped to core.errors.DatabaseError
"""
