"""Application database adapter."""

from nsregistry.adapters.db.app_db import SCHEMA, AppDatabase

__all__ = ["SCHEMA", "AppDatabase"]
