"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The token travels in the Authorization header. /login hands out the raw JWT
and clients commonly echo it back as-is, so both forms are accepted:
  Authorization: <token>
  Authorization: Bearer <token>

verify_token() is the hard guard: 401 when no token is supplied, 400 when the
token does not verify. On success the identity is stored on
request.state.member for later handlers and returned.

enforce_token_if_enabled() is attached to the product and category routers.
It only runs verify_token() when app.state.require_auth is set (REQUIRE_AUTH),
so the resource routes stay open by default.

Layer rule: no imports from catalog/. This module may import from fastapi
because it is part of the dependency injection system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.models import MemberIdentity
from auth.tokens import decode_access_token


def _extract_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "").strip()
    if header.startswith("Bearer "):
        header = header[7:].strip()
    return header or None


def verify_token(request: Request) -> MemberIdentity:
    """Require a valid bearer token.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(identity: MemberIdentity = Depends(verify_token)): ...
    """
    token = _extract_token(request)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Access denied."},
        )
    identity = decode_access_token(token)
    if identity is None:
        raise HTTPException(
            status_code=400,
            detail={"code": "invalid_token", "message": "Invalid token."},
        )
    request.state.member = identity
    return identity


def enforce_token_if_enabled(request: Request) -> MemberIdentity | None:
    """Run verify_token() only when the app was started with REQUIRE_AUTH=true."""
    if not getattr(request.app.state, "require_auth", False):
        return None
    return verify_token(request)
