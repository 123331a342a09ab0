from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Type

from graphql import GraphQLError
from starlette.requests import Request
from strawberry.permission import BasePermission
from strawberry.types import Info

from ...application.use_cases.verify import Secret
from ...domain.entities import Token
from ...domain.exceptions import InvalidClaimError
from ...settings import DEFAULT_ALGORITHM, DEFAULT_COOKIE_NAME
from ..common.verifier_factory import TokenVerifier, create_token_verifier

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------- #
# Context type used by Strawberry
# --------------------------------------------------------------------- #

@dataclass(slots=True)
class StrawberryTokenContext:
    """
    Default context type for Strawberry GraphQL.

    You can use this directly, or extend it in your app by adding more fields.
    """
    request: Request
    token: Optional[Token] = None
    extra: Any = None  # host app can put UoW, services, etc. here if desired


def _extract_token_from_request(
    request: Request,
    cookie_name: str,
) -> Optional[str]:
    """
    Return the raw token from `Authorization: Bearer <token>` or from
    the `cookie_name` cookie, or None if neither is set.
    """
    auth_header = request.headers.get("Authorization") or ""
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()

    return request.cookies.get(cookie_name) or None


# --------------------------------------------------------------------- #
# Main integration: StrawberryTokenAuth
# --------------------------------------------------------------------- #

@dataclass(slots=True)
class StrawberryTokenAuth:
    """
    Strawberry GraphQL integration for pkg_jwt.

    Responsibilities:
      - provide a `context_getter` for Strawberry's GraphQLRouter
      - provide permission classes you can attach to fields/mutations
    """

    verifier: TokenVerifier

    @property
    def cookie_name(self) -> str:
        return self.verifier.settings.cookie_name

    # ----------------------------------------------------------------- #
    # Context getter
    # ----------------------------------------------------------------- #

    def make_context_getter(
        self,
        *,
        optional: bool = True,
        extra_factory: Optional[Callable[[Request, Optional[Token]], Any]] = None,
    ):
        """
        Build an async function compatible with:

            strawberry.fastapi.GraphQLRouter(context_getter=...)

        Args:
            optional:
                - True:   missing or rejected tokens become `token=None`
                - False:  they become GraphQL errors
            extra_factory:
                - Optional callable: (request, token) -> Any, stored on
                  context.extra

        Returns:
            async function(request: Request) -> StrawberryTokenContext
        """

        def _build(request: Request, token: Optional[Token]) -> StrawberryTokenContext:
            extra = extra_factory(request, token) if extra_factory else None
            return StrawberryTokenContext(request=request, token=token, extra=extra)

        async def _context_getter(request: Request) -> StrawberryTokenContext:
            raw = _extract_token_from_request(request, self.cookie_name)

            if not raw:
                if optional:
                    return _build(request, None)
                raise GraphQLError("Not authenticated")

            result = self.verifier.verify_result(raw)
            if result.ok:
                return _build(request, result.token)

            logger.info("Rejected GraphQL token: %s", result.kind.value)
            if optional:
                return _build(request, None)
            raise GraphQLError(str(result.error))

        return _context_getter

    # ----------------------------------------------------------------- #
    # Permission helpers
    # ----------------------------------------------------------------- #

    def require_authenticated(self) -> Type[BasePermission]:
        """
        Permission: the request carried a verified token.
        """

        class _RequireAuthenticated(BasePermission):
            message = "Authentication required"

            def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
                ctx: StrawberryTokenContext = info.context
                return ctx.token is not None

        return _RequireAuthenticated

    def require_claims(self, claims: Mapping[str, str]) -> Type[BasePermission]:
        """
        Permission: the verified token carries exactly these claim values.

        Example:

            RequireService = strawberry_auth.require_claims({"sub": "billing"})

            @strawberry.field(permission_classes=[RequireService])
            def invoices(self, info: Info) -> list[InvoiceType]:
                ...
        """
        verifier = self.verifier
        requirements = verifier.require_claims(claims)

        class _RequireClaims(BasePermission):
            message = "Forbidden"

            def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
                ctx: StrawberryTokenContext = info.context
                if ctx.token is None:
                    self.message = "Authentication required"
                    return False

                try:
                    verifier.check_claims(ctx.token, requirements)
                    return True
                except InvalidClaimError as exc:
                    self.message = str(exc)
                    return False

        return _RequireClaims


# --------------------------------------------------------------------- #
# High-level helper
# --------------------------------------------------------------------- #

def create_strawberry_auth(
    *,
    secret: Secret,
    algorithm: str = DEFAULT_ALGORITHM,
    expected_claims: Mapping[str, str] | None = None,
    cookie_name: str = DEFAULT_COOKIE_NAME,
) -> StrawberryTokenAuth:
    """
    Convenience helper:

        strawberry_auth = create_strawberry_auth(secret=settings.TOKEN_SECRET)
    """
    verifier = create_token_verifier(
        secret=secret,
        algorithm=algorithm,
        expected_claims=expected_claims,
        cookie_name=cookie_name,
    )
    return StrawberryTokenAuth(verifier=verifier)
