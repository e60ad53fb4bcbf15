"""Database Layer — declarative Base shared by models and alembic/env.py."""
