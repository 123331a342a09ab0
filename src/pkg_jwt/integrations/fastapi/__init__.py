from __future__ import annotations

from typing import Mapping

from .deps import FastAPITokenAuth
from .security import bearer_scheme, extract_token_from_request
from ..common.verifier_factory import (
    TokenVerifier,
    create_token_verifier,
    create_token_verifier_from_env,
)
from ...application.use_cases.verify import Secret
from ...settings import DEFAULT_ALGORITHM, DEFAULT_COOKIE_NAME


def create_fastapi_auth(
    *,
    secret: Secret,
    algorithm: str = DEFAULT_ALGORITHM,
    expected_claims: Mapping[str, str] | None = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> FastAPITokenAuth:
    """
    High-level helper for FastAPI apps:

    - Creates a TokenVerifier from the shared secret and policy
    - Wraps it in FastAPITokenAuth, exposing dependencies like:

        fastapi_auth.get_current_token
        fastapi_auth.get_optional_token
        fastapi_auth.require_claims(...)
    """
    verifier: TokenVerifier = create_token_verifier(
        secret=secret,
        algorithm=algorithm,
        expected_claims=expected_claims,
        cookie_name=cookie_name,
    )
    return FastAPITokenAuth(verifier=verifier)


def create_fastapi_auth_from_env() -> FastAPITokenAuth:
    return FastAPITokenAuth(verifier=create_token_verifier_from_env())


__all__ = [
    "FastAPITokenAuth",
    "bearer_scheme",
    "create_fastapi_auth",
    "create_fastapi_auth_from_env",
    "extract_token_from_request",
]
