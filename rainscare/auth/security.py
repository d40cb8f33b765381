# -*- coding: utf-8 -*-
"""Auth: password hashing, session tokens and FastAPI dependencies.

Session tokens are compact HS256 JWTs signed with RAINSCARE_JWT_SECRET and
carried either as a bearer header or in the `rainscare_token` cookie.
Admin routes do not use sessions; they check the `x-admin-api-key` header.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, HTTPException, Request

from ..config import settings
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "rainscare_token"
ADMIN_KEY_HEADER = "x-admin-api-key"

_HASH_SCHEME = "pbkdf2_sha256"
_HASH_ITERATIONS = 200_000
_TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    pass


def _b64e(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64d(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


def _b64json(obj: Dict[str, Any]) -> str:
    return _b64e(json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


# ---- passwords ----


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    digest = _derive(password, salt, _HASH_ITERATIONS)
    return "$".join((_HASH_SCHEME, str(_HASH_ITERATIONS), _b64e(salt), _b64e(digest)))


def verify_password(password: str, password_hash: str) -> bool:
    parts = (password_hash or "").split("$")
    if len(parts) != 4 or parts[0] != _HASH_SCHEME:
        return False
    try:
        iterations, salt, expected = int(parts[1]), _b64d(parts[2]), _b64d(parts[3])
    except ValueError:
        return False
    return hmac.compare_digest(_derive(password, salt, iterations), expected)


# ---- tokens ----


def _signature(signing_input: str) -> bytes:
    return hmac.new(settings.jwt_secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def issue_token(user: Dict[str, Any], now: Optional[datetime] = None) -> Tuple[str, datetime]:
    """Sign a session token for a user row; returns the token and its expiry."""
    now = now or datetime.now(timezone.utc)
    expires = now + timedelta(days=int(settings.token_ttl_days))
    claims = {"sub": user["id"], "email": user["email"], "iat": int(now.timestamp()), "exp": int(expires.timestamp())}
    signing_input = f"{_b64json(_TOKEN_HEADER)}.{_b64json(claims)}"
    return f"{signing_input}.{_b64e(_signature(signing_input))}", expires


def read_token(token: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Verify a session token and return its claims. Raises TokenError."""
    try:
        header_b64, claims_b64, sig_b64 = token.split(".")
        header = json.loads(_b64d(header_b64))
        given = _b64d(sig_b64)
    except ValueError as exc:
        raise TokenError("Invalid token") from exc
    if not isinstance(header, dict) or header.get("alg") != _TOKEN_HEADER["alg"]:
        raise TokenError("Invalid token")
    if not hmac.compare_digest(_signature(f"{header_b64}.{claims_b64}"), given):
        raise TokenError("Invalid token")
    try:
        claims = json.loads(_b64d(claims_b64))
    except ValueError as exc:
        raise TokenError("Invalid token") from exc
    if not isinstance(claims, dict) or not claims.get("sub"):
        raise TokenError("Invalid token")
    now = now or datetime.now(timezone.utc)
    if int(claims.get("exp") or 0) < int(now.timestamp()):
        raise TokenError("Token expired")
    return claims


def token_from_request(request: Request) -> Optional[str]:
    scheme, _, credentials = (request.headers.get("authorization") or "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


# ---- dependencies ----


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    """Resolve the session user once per request; the middleware gate and route dependencies share it."""
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        claims = read_token(token)
    except TokenError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user = get_user_by_id(str(claims["sub"]))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user


def require_admin(request: Request) -> None:
    """Admin routes are keyed by a shared secret header rather than a user session."""
    expected = settings.admin_key
    if not expected:
        raise HTTPException(status_code=503, detail="Admin access is not configured")
    provided = request.headers.get(ADMIN_KEY_HEADER) or ""
    if not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=401, detail="Invalid admin API key")
