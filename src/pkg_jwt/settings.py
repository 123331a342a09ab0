from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from .domain.value_objects import ClaimRequirement, claim_requirements

DEFAULT_ALGORITHM = "HS256"
DEFAULT_COOKIE_NAME = "access_token"


@dataclass(slots=True)
class VerifierSettings:
    """
    Shared-secret verification settings.

    Host code decides how to construct this (env, config file, etc.).
    The secret never shows up in `repr`.
    """
    secret: bytes = field(repr=False)
    algorithm: str = DEFAULT_ALGORITHM
    expected_claims: Dict[str, str] = field(default_factory=dict)

    # Integration wiring
    cookie_name: str = DEFAULT_COOKIE_NAME

    def __post_init__(self) -> None:
        if isinstance(self.secret, str):
            self.secret = self.secret.encode("utf-8")
        if not self.secret:
            raise ValueError("The verification secret must not be empty")

    @property
    def requirements(self) -> tuple[ClaimRequirement, ...]:
        return claim_requirements(self.expected_claims)
