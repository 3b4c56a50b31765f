"""
api/routes/auth.py -- Member registration and login endpoints.

Routes:
  POST /register  -- store username/password; 201 "User registered"
  POST /login     -- 200 with the raw token as text/plain body and in the
                     "authorization" response header; 400 on unknown
                     username or wrong password
  GET  /me        -- identity of the token holder (requires verify_token)

Registration does not check for an existing username. With UNIQUE_KEYS=true
the store's unique index rejects the duplicate and the app answers 409.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from api.models import CredentialsRequest, ErrorDetail, MeResponse
from auth.dependencies import verify_token
from auth.models import MemberIdentity
from auth.store import MemberStore
from auth.tokens import LoginError, login_member, register_member

# Auth policy:
# - POST /register: public
# - POST /login:    public
# - GET  /me:       requires a valid token (verify_token)
router = APIRouter()


@router.post("/register", status_code=201, response_class=PlainTextResponse)
def register(request: Request, body: CredentialsRequest) -> PlainTextResponse:
    member_store: MemberStore = request.app.state.member_store
    register_member(member_store, body.username, body.password)
    return PlainTextResponse("User registered", status_code=201)


@router.post("/login", response_class=PlainTextResponse)
def login(request: Request, body: CredentialsRequest) -> PlainTextResponse:
    """Check credentials and hand out a signed token.

    The token is returned twice: as the response body and in the
    authorization header, so clients can pick it up either way.
    """
    member_store: MemberStore = request.app.state.member_store
    try:
        token = login_member(member_store, body.username, body.password)
    except LoginError as exc:
        raise HTTPException(
            status_code=400,
            detail=ErrorDetail(code=exc.code, message=exc.message).model_dump(),
        ) from exc

    resp = PlainTextResponse(token)
    resp.headers["authorization"] = token
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.get("/me", response_model=MeResponse)
def me(request: Request, identity: MemberIdentity = Depends(verify_token)) -> MeResponse:
    """Return the member the presented token was issued to."""
    member_store: MemberStore = request.app.state.member_store
    member = member_store.get_by_id(identity.member_id)
    if member is None:
        raise HTTPException(
            status_code=404,
            detail=ErrorDetail(code="not_found", message="Member not found").model_dump(),
        )
    return MeResponse(id=member.id, username=member.username)
