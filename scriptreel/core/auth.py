"""
Owner identity helpers.

Users authenticate with an external identity provider which issues bearer
tokens of the form ``<user_id>.<signature>``, where the signature is the hex
HMAC-SHA256 of the user id under ``AUTH_SECRET``. This module only verifies
those tokens and turns them into an explicit ``OwnerContext`` that is passed
to every component needing the owner id.
"""

from __future__ import annotations

import hashlib
import hmac
import os
from dataclasses import dataclass

from fastapi import Request

from .exceptions import AuthenticationError
from .runtime import parse_bool_env

SESSION_COOKIE_NAME = "scriptreel_session"
AUTH_BEARER_PREFIX = "Bearer "
ANONYMOUS_USER_ID = "anonymous"


@dataclass(frozen=True)
class OwnerContext:
    """The authenticated user on whose behalf records are created and read."""
    user_id: str


def _auth_secret() -> str:
    return os.getenv("AUTH_SECRET", "scriptreel-auth-secret").strip()


def is_auth_enabled() -> bool:
    return parse_bool_env(os.getenv("AUTH_ENABLED"), default=True)


def _signature(user_id: str) -> str:
    return hmac.new(_auth_secret().encode("utf-8"), user_id.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_auth_token(user_id: str) -> str:
    """Sign a token for ``user_id`` (used by the identity provider and in tests)."""
    if not user_id or "." in user_id:
        raise ValueError("user_id must be non-empty and must not contain '.'")
    return f"{user_id}.{_signature(user_id)}"


def verify_auth_token(token: str) -> str | None:
    """Return the user id carried by a valid token, else None."""
    user_id, sep, signature = token.rpartition(".")
    if not sep or not user_id or not signature:
        return None
    if not hmac.compare_digest(signature, _signature(user_id)):
        return None
    return user_id


def _extract_bearer_token(authorization_header: str | None) -> str | None:
    if not authorization_header:
        return None
    if not authorization_header.startswith(AUTH_BEARER_PREFIX):
        return None
    return authorization_header[len(AUTH_BEARER_PREFIX):].strip() or None


def extract_request_token(request: Request) -> str | None:
    bearer = _extract_bearer_token(request.headers.get("Authorization"))
    if bearer:
        return bearer

    cookie_token = request.cookies.get(SESSION_COOKIE_NAME)
    if cookie_token:
        return cookie_token

    return None


def resolve_owner(request: Request) -> OwnerContext | None:
    token = extract_request_token(request)
    if token:
        user_id = verify_auth_token(token)
        if user_id:
            return OwnerContext(user_id=user_id)
    if not is_auth_enabled():
        return OwnerContext(user_id=ANONYMOUS_USER_ID)
    return None


def require_owner(request: Request) -> OwnerContext:
    """FastAPI dependency: the request's owner, or 401."""
    owner = resolve_owner(request)
    if owner is None:
        raise AuthenticationError("Authentication required")
    return owner
