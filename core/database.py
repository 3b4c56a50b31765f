"""
core/database.py -- The process-wide MongoDB handle.

One Database is opened in the API lifespan and shared by every store for the
life of the process. Stores receive the pymongo database object by reference;
nothing in the codebase opens its own client.

Usage:
    db = Database("mongodb://localhost:27017/scentshop")
    db.ping()
    products = ProductStore(db.db)
    db.close()

Tests pass a ready-made client (mongomock.MongoClient) instead of a URI so no
server is needed.
"""

from __future__ import annotations

import logging

from pymongo import MongoClient
from pymongo.database import Database as MongoDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger("scentshop.db")


class Database:
    """Owns the MongoClient and the selected database."""

    def __init__(
        self,
        uri: str = "",
        name: str = "scentshop",
        client: MongoClient | None = None,
        timeout_ms: int = 5000,
    ) -> None:
        # timeout_ms caps server selection so a ping against a down server
        # (GET /health) fails fast instead of waiting pymongo's default 30 s.
        self.client: MongoClient = (
            client if client is not None else MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        )
        # Prefer the database named in the URI; fall back to the configured name.
        self.db: MongoDatabase = self.client.get_default_database(default=name)
        logger.info("MongoDB handle created for database %r", self.db.name)

    def ping(self) -> bool:
        """Return True if the server answers a ping, False otherwise."""
        try:
            self.client.admin.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    def close(self) -> None:
        self.client.close()
        logger.info("MongoDB connection closed")
