"""
auth/store.py -- MongoDB persistence layer for auth entities.

Pattern: Repository + Data Mapper (same as catalog/store.py).
MemberStore is the repository; _doc_to_member is the mapper.
Route and dependency code never touches pymongo directly.

Collection: "members". Documents are {username, password}; MongoDB assigns
_id. Username uniqueness is only enforced when the store is created with
unique_usernames=True (UNIQUE_KEYS setting); otherwise a second registration
with the same username creates a second document and get_by_username()
returns the first one in natural order.

Layer rule: no imports from api/ or catalog/.
"""

from __future__ import annotations

import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database

from auth.models import Member

logger = logging.getLogger("scentshop.auth")

_COLLECTION = "members"


def _doc_to_member(doc: dict) -> Member:
    return Member(
        id=str(doc["_id"]),
        username=doc.get("username", ""),
        password=doc.get("password", ""),
    )


class MemberStore:
    """Repository for Member entities.

    Usage:
        store = MemberStore(db)
        member_id = store.create_member(Member(username="alice", password="secret"))
        member = store.get_by_username("alice")
    """

    def __init__(self, db: Database, unique_usernames: bool = False) -> None:
        self.collection = db[_COLLECTION]
        if unique_usernames:
            self.collection.create_index("username", unique=True)
            logger.info("Unique index on members.username ensured")

    def create_member(self, member: Member) -> str:
        """Insert a new member and return its assigned id.

        Raises pymongo.errors.DuplicateKeyError when unique usernames are
        enforced and the username is taken.
        """
        result = self.collection.insert_one({"username": member.username, "password": member.password})
        return str(result.inserted_id)

    def get_by_username(self, username: str) -> Member | None:
        doc = self.collection.find_one({"username": username})
        return _doc_to_member(doc) if doc else None

    def get_by_id(self, member_id: str) -> Member | None:
        """Return the member with the given id, or None if absent or not an ObjectId."""
        try:
            oid = ObjectId(member_id)
        except (InvalidId, TypeError):
            return None
        doc = self.collection.find_one({"_id": oid})
        return _doc_to_member(doc) if doc else None
