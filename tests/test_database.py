"""Unit tests for core/database.py -- client construction and ping."""

from unittest.mock import MagicMock, patch

import mongomock
from pymongo.errors import ServerSelectionTimeoutError

from core.database import Database


def test_uri_client_gets_server_selection_timeout() -> None:
    """A down server must fail the ping within timeout_ms, not pymongo's 30 s default."""
    with patch("core.database.MongoClient") as client_cls:
        Database("mongodb://db.internal:27017/shop", timeout_ms=1500)
    client_cls.assert_called_once_with("mongodb://db.internal:27017/shop", serverSelectionTimeoutMS=1500)


def test_default_timeout_is_bounded() -> None:
    with patch("core.database.MongoClient") as client_cls:
        Database("mongodb://localhost:27017/shop")
    assert client_cls.call_args.kwargs["serverSelectionTimeoutMS"] == 5000


def test_ping_reports_unreachable_server() -> None:
    client = MagicMock()
    client.admin.command.side_effect = ServerSelectionTimeoutError("timed out")
    assert Database(name="scentshop_test", client=client).ping() is False


def test_injected_client_uses_fallback_name() -> None:
    database = Database(name="scentshop_test", client=mongomock.MongoClient())
    assert database.db.name == "scentshop_test"
