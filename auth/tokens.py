"""
auth/tokens.py -- Token issue/verify and the register/login operations.

Design decisions:
  JWT: python-jose with HS256. Tokens are signed with TOKEN_SECRET and carry
       only the member id as the "sub" claim. No "exp" claim is set, so a
       token stays valid until the secret changes. Verification returns None
       on any failure -- the guard in auth/dependencies.py turns that into 400.

  Passwords: stored and compared as plaintext. All comparisons go through
       check_password() so a hashing scheme can replace it without touching
       authenticate_member() or the routes.

  TOKEN_SECRET: sourced from core.config.get_settings(). The Settings class
       validates the secret at startup: dev mode (DEBUG=true) auto-generates
       one with a warning; production mode refuses to start without one.

Layer rule: no imports from api/ or catalog/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from jose import JWTError, jwt

from auth.models import Member, MemberIdentity
from core.config import get_settings

if TYPE_CHECKING:
    from auth.store import MemberStore

logger = logging.getLogger("scentshop.auth")

# ---------------------------------------------------------------------------
# Module-level settings
# ---------------------------------------------------------------------------

_settings = get_settings()

_ALGORITHM = "HS256"


class LoginError(Exception):
    """Raised by authenticate_member(); code is the machine-readable reason."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


# ---------------------------------------------------------------------------
# Credential comparison
# ---------------------------------------------------------------------------


def check_password(stored: str, supplied: str) -> bool:
    """Return True if the supplied password matches the stored credential."""
    return stored == supplied


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(member_id: str) -> str:
    """Encode a signed JWT whose subject is the member's storage id."""
    return jwt.encode({"sub": member_id}, _settings.token_secret, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> MemberIdentity | None:
    """Decode and verify a JWT. Returns the identity or None on any failure."""
    try:
        payload = jwt.decode(token, _settings.token_secret, algorithms=[_ALGORITHM])
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    return MemberIdentity(member_id=subject)


# ---------------------------------------------------------------------------
# Register / login
# ---------------------------------------------------------------------------


def register_member(store: MemberStore, username: str, password: str) -> str:
    """Store a new member verbatim and return its id. Duplicates are not checked here."""
    member_id = store.create_member(Member(username=username, password=password))
    logger.info("Registered member %s (%s)", username, member_id)
    return member_id


def authenticate_member(store: MemberStore, username: str, password: str) -> Member:
    """Look up the first member named username and compare passwords.

    Raises LoginError("username_not_found") or LoginError("invalid_password").
    Storage errors propagate unchanged.
    """
    member = store.get_by_username(username)
    if member is None:
        raise LoginError("username_not_found", "Username not found.")
    if not check_password(member.password, password):
        raise LoginError("invalid_password", "Invalid password.")
    return member


def login_member(store: MemberStore, username: str, password: str) -> str:
    """Authenticate and return a freshly signed token for the member."""
    member = authenticate_member(store, username, password)
    return create_access_token(member.id)
