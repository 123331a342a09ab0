# src/pkg_jwt/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .constants import ValidatedClaim
from .entities import Token
from .exceptions import ErrorKind, TokenError


# --- Wire value objects ----------------------------------------------------


@dataclass(frozen=True, slots=True)
class TokenSegments:
    """
    The three raw (still base64url-encoded) segments of a token.

    `signature` is the empty string for a token written as `header.payload.`.
    """
    header: str
    payload: str
    signature: str

    def __iter__(self):
        return iter((self.header, self.payload, self.signature))


# --- Claims policy value objects ------------------------------------------


@dataclass(frozen=True, slots=True)
class ClaimRequirement:
    """
    One expected claim value.

    The expected value is kept out of `repr` since it usually is identity
    data (a subject or token id).
    """
    claim: ValidatedClaim
    expected: str = field(repr=False)


def claim_requirements(claims: Mapping[str, str] | None) -> Tuple[ClaimRequirement, ...]:
    """
    Turn a `{claim name: expected value}` mapping into requirements.

    Names with no registered validator are dropped silently.
    """
    known = {c.value: c for c in ValidatedClaim}
    return tuple(
        ClaimRequirement(known[name], expected)
        for name, expected in (claims or {}).items()
        if name in known
    )


def require_subject(subject: str) -> ClaimRequirement:
    return ClaimRequirement(ValidatedClaim.SUBJECT, subject)


def require_jwt_id(jwt_id: str) -> ClaimRequirement:
    return ClaimRequirement(ValidatedClaim.JWT_ID, jwt_id)


# --- Outcome ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """
    Non-raising outcome of a verification: exactly one of `token` and
    `error` is set.

        match result.error:
            case None:
                use(result.token)
            case AlgorithmMismatchError(expected, actual):
                ...
            case DecodeError():
                ...
    """
    token: Optional[Token] = None
    error: Optional[TokenError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> Token:
        """Return the token or raise the stored error."""
        if self.error is not None:
            raise self.error
        assert self.token is not None
        return self.token
