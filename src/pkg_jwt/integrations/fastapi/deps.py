from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from .security import bearer_scheme, extract_token_from_request, unauthorized
from ..common.verifier_factory import TokenVerifier
from ...domain.entities import Token
from ...domain.exceptions import InvalidClaimError, TokenError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FastAPITokenAuth:
    """
    FastAPI integration for pkg_jwt.

    Built on top of the framework-agnostic TokenVerifier facade. Any
    decode or verification failure is a 401; a claim required by a
    single route but missing from the token is a 403.
    """

    verifier: TokenVerifier

    # ------------------------------------------------------------------ #
    # Base dependencies
    # ------------------------------------------------------------------ #

    def _verify(self, token: str) -> Token:
        try:
            return self.verifier.verify(token)
        except TokenError as exc:
            logger.info("Rejected bearer token: %s", exc.kind.value)
            raise unauthorized(str(exc)) from exc

    async def get_current_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Token:
        """Dependency: require a verified token."""
        token = extract_token_from_request(
            request,
            credentials,
            cookie_name=self.verifier.settings.cookie_name,
        )
        return self._verify(token)

    async def get_optional_token(
            self,
            request: Request,
            credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    ) -> Optional[Token]:
        """Dependency: verified token, or None when absent or invalid."""
        try:
            token = extract_token_from_request(
                request,
                credentials,
                cookie_name=self.verifier.settings.cookie_name,
            )
        except HTTPException:
            # no token anywhere -> anonymous
            return None

        result = self.verifier.verify_result(token)
        return result.token

    # ------------------------------------------------------------------ #
    # Claim dependency factories
    # ------------------------------------------------------------------ #

    def require_claims(self, **claims: str) -> Callable:
        """
        Dependency factory: require exact values for registered claims.

            @app.get("/me", dependencies=[Depends(auth.require_claims(sub="alice"))])
        """
        requirements = self.verifier.require_claims(claims)

        async def dependency(
                token: Token = Depends(self.get_current_token),
        ) -> Token:
            try:
                return self.verifier.check_claims(token, requirements)
            except InvalidClaimError as exc:
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                    detail=str(exc)) from exc

        return dependency


"""
Example usage:

from pkg_jwt.integrations.fastapi import create_fastapi_auth
from app.config import settings  # your own settings

fastapi_auth = create_fastapi_auth(
    secret=settings.TOKEN_SECRET,
    algorithm="HS256",
)

get_current_token = fastapi_auth.get_current_token
get_optional_token = fastapi_auth.get_optional_token
require_claims = fastapi_auth.require_claims
"""
