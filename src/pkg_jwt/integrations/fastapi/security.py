from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...settings import DEFAULT_COOKIE_NAME

# Expose this so apps can plug it into dependencies if they want OpenAPI security
bearer_scheme = HTTPBearer(auto_error=False)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers=BEARER_CHALLENGE,
    )


def _bearer_from_header(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    scheme, _, token = value.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def extract_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> str:
    """
    Extract a raw token from either:

      1. HTTP Bearer auth header (preferred)
      2. A cookie (e.g. 'access_token')

    Raises HTTPException(401) if no token is found. The token itself is
    not inspected here.
    """
    if credentials is not None:
        token = (credentials.credentials or "").strip()
        if token:
            return token

    token = _bearer_from_header(request.headers.get("Authorization"))
    if token:
        return token

    cookie_token = request.cookies.get(cookie_name)
    if cookie_token:
        return cookie_token

    raise unauthorized("Not authenticated")
