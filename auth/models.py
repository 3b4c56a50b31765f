"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in catalog/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or catalog/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Member:
    """A registered username/password credential.

    password is stored exactly as submitted. Comparison goes through
    auth.tokens.check_password so a hashing scheme can be swapped in there.

    id is the MongoDB ObjectId as a string; None before the record is written.
    """

    username: str
    password: str
    id: str | None = None


@dataclass(frozen=True)
class MemberIdentity:
    """The identity carried by a verified bearer token."""

    member_id: str
