"""Postgres storage backend: async SQLAlchemy models, repositories and Alembic migrations."""
