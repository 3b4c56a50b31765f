"""
tests/conftest.py -- Shared test fixtures for ScentShop tests.

This module provides:
  - mongo_db: a fresh in-memory mongomock database for store unit tests
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_client: TestClient over the real app with the default (open) flags
  - guarded_client / strict_client / unique_client: same app with one
    behaviour switch turned on

Every fixture gets its own mongomock client, so collections start empty and
no test sees another test's documents.

The DEBUG env var must be set before any auth module import so get_settings()
auto-generates TOKEN_SECRET in dev mode rather than raising ValueError.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set DEBUG before any auth/core import so get_settings() can
# auto-generate TOKEN_SECRET in dev mode instead of raising ValueError.
os.environ.setdefault("DEBUG", "true")

import mongomock
import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.store import MemberStore
from catalog.store import CategoryStore, ProductStore
from core.database import Database

# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _make_test_database() -> Database:
    return Database(name="scentshop_test", client=mongomock.MongoClient())


def _patch_lifespan(
    database: Database,
    require_auth: bool = False,
    strict_not_found: bool = False,
    unique_keys: bool = False,
):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.database = database
        app.state.member_store = MemberStore(database.db, unique_usernames=unique_keys)
        app.state.products = ProductStore(database.db, unique_ids=unique_keys)
        app.state.categories = CategoryStore(database.db, unique_ids=unique_keys)
        app.state.require_auth = require_auth
        app.state.strict_not_found = strict_not_found
        yield

    return test_lifespan


def _client(**flags) -> Generator[TestClient, None, None]:
    database = _make_test_database()
    app.router.lifespan_context = _patch_lifespan(database, **flags)
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client
    database.close()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mongo_db():
    """A fresh mongomock database for store-level tests."""
    client = mongomock.MongoClient()
    yield client["scentshop_test"]
    client.close()


@pytest.fixture
def api_client() -> Generator[TestClient, None, None]:
    """TestClient with the default flags: open resource routes, silent no-op update/delete."""
    yield from _client()


@pytest.fixture
def guarded_client() -> Generator[TestClient, None, None]:
    """TestClient with REQUIRE_AUTH on: product/category routes need a token."""
    yield from _client(require_auth=True)


@pytest.fixture
def strict_client() -> Generator[TestClient, None, None]:
    """TestClient with STRICT_NOT_FOUND on: update/delete of unknown ids answer 404."""
    yield from _client(strict_not_found=True)


@pytest.fixture
def unique_client() -> Generator[TestClient, None, None]:
    """TestClient with UNIQUE_KEYS on: unique indexes on resource id and username."""
    yield from _client(unique_keys=True)


# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def rose() -> dict:
    return {
        "id": "p1",
        "category": "floral",
        "image": "https://example.com/rose.png",
        "is_enabled": 1,
        "origin_price": "12",
        "price": "10",
        "title": "Rose",
        "unit": "bottle",
    }
