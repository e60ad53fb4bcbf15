"""Infrastructure Layer — database sessions, the entity store, logging setup.

Invariants:
    - SQLAlchemy exceptions never leave this layer unmapped
"""
