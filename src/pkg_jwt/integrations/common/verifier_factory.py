from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ...application.use_cases.validate_claims import ValidateClaimsUseCase
from ...application.use_cases.verify import Secret, VerifyTokenUseCase
from ...domain.entities import Token
from ...domain.value_objects import (
    ClaimRequirement,
    VerificationResult,
    claim_requirements,
    require_jwt_id,
    require_subject,
)
from ...env import settings_from_env
from ...settings import DEFAULT_ALGORITHM, DEFAULT_COOKIE_NAME, VerifierSettings


@dataclass(slots=True)
class TokenVerifier:
    """
    Framework-agnostic verification facade.

    Binds a VerifierSettings to the verification use case so integrations
    (FastAPI, Strawberry, etc.) only ever deal with raw token strings.
    """

    settings: VerifierSettings
    verify_use_case: VerifyTokenUseCase = field(default_factory=VerifyTokenUseCase)
    claims_use_case: ValidateClaimsUseCase = field(default_factory=ValidateClaimsUseCase)

    # --- Core operations --------------------------------------------------

    def verify(self, token: str) -> Token:
        """Token string -> verified Token (or raise a TokenError)."""
        s = self.settings
        return self.verify_use_case.execute(token, s.algorithm, s.secret, s.requirements)

    def verify_result(self, token: str) -> VerificationResult:
        s = self.settings
        return self.verify_use_case.execute_result(token, s.algorithm, s.secret, s.requirements)

    def check_claims(
            self,
            token: Token,
            requirements: Iterable[ClaimRequirement],
    ) -> Token:
        """Check extra claim requirements on an already verified Token."""
        self.claims_use_case.execute(token.payload, requirements)
        return token

    # --- Convenience helpers to build requirements ------------------------

    def require_claims(self, claims: Mapping[str, str]) -> tuple[ClaimRequirement, ...]:
        return claim_requirements(claims)

    def require_subject(self, subject: str) -> ClaimRequirement:
        return require_subject(subject)

    def require_jwt_id(self, jwt_id: str) -> ClaimRequirement:
        return require_jwt_id(jwt_id)


def create_token_verifier(
        *,
        secret: Secret,
        algorithm: str = DEFAULT_ALGORITHM,
        expected_claims: Mapping[str, str] | None = None,
        cookie_name: str = DEFAULT_COOKIE_NAME,
) -> TokenVerifier:
    """
    High-level factory: shared secret + policy -> TokenVerifier.
    """
    settings = VerifierSettings(
        secret=secret if isinstance(secret, str) else bytes(secret),
        algorithm=algorithm,
        expected_claims=dict(expected_claims or {}),
        cookie_name=cookie_name,
    )
    return TokenVerifier(settings=settings)


def create_token_verifier_from_env() -> TokenVerifier:
    """Same as `create_token_verifier`, configured from PKG_JWT_* variables."""
    return TokenVerifier(settings=settings_from_env())
