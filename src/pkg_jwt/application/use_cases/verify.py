from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Union

from ...adapters.codec.claim_decoder import SegmentClaimDecoder
from ...adapters.codec.tokenizer import split_token
from ...adapters.crypto.signature import HmacSignatureVerifier
from ...domain.entities import Token
from ...domain.exceptions import SignatureInvalidError, TokenError
from ...domain.ports import ClaimDecoder, SignatureVerifier
from ...domain.value_objects import ClaimRequirement, VerificationResult, claim_requirements
from .validate_claims import ValidateClaimsUseCase, check_algorithm

logger = logging.getLogger(__name__)

Secret = Union[bytes, bytearray, memoryview, str]
ExpectedClaims = Union[Mapping[str, str], Iterable[ClaimRequirement], None]


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    return bytes(secret)


def _requirements(claims: ExpectedClaims) -> tuple[ClaimRequirement, ...]:
    if claims is None or isinstance(claims, Mapping):
        return claim_requirements(claims)
    return tuple(claims)


@dataclass(slots=True)
class VerifyTokenUseCase:
    """
    Application use case:
    - split the raw token and decode its segments
    - check the declared algorithm against the expected one
    - check the signature over the encoded header and payload
    - check the expected claims

    Steps run strictly in that order and stop at the first failure. The
    use case keeps no per-call state, so one instance can be shared
    freely between threads. The secret is only used for the duration of
    a call.
    """

    claim_decoder: ClaimDecoder = field(default_factory=SegmentClaimDecoder)
    signature_verifier: SignatureVerifier = field(default_factory=HmacSignatureVerifier)
    claims_validator: ValidateClaimsUseCase = field(default_factory=ValidateClaimsUseCase)

    def decode(self, token: str) -> Token:
        """
        Split and decode a token without verifying it.

        Raises:
            DecodeError
        """
        return self.claim_decoder.decode(split_token(token))

    def execute(
            self,
            token: str,
            algorithm: str,
            secret: Secret,
            claims: ExpectedClaims = None,
    ) -> Token:
        """
        Verify a token and return it fully decoded.

        Raises:
            DecodeError: malformed token, bad base64url, bad JSON or a
                malformed time claim.
            VerificationError: algorithm mismatch, unsupported algorithm,
                invalid signature or a claim mismatch.
        """
        try:
            decoded = self.decode(token)

            check_algorithm(decoded.header, algorithm)

            if not self.signature_verifier.verify(algorithm, _secret_bytes(secret), decoded):
                raise SignatureInvalidError()

            self.claims_validator.execute(decoded.payload, _requirements(claims))
        except TokenError as exc:
            logger.debug("Token rejected (%s): %s", exc.kind.value, exc)
            raise

        return decoded

    def execute_result(
            self,
            token: str,
            algorithm: str,
            secret: Secret,
            claims: ExpectedClaims = None,
    ) -> VerificationResult:
        """Same as `execute`, but returns the failure instead of raising it."""
        try:
            return VerificationResult(token=self.execute(token, algorithm, secret, claims))
        except TokenError as exc:
            return VerificationResult(error=exc)


_default_use_case = VerifyTokenUseCase()


def verify(
        token: str,
        algorithm: str,
        secret: Secret,
        expected_claims: ExpectedClaims = None,
) -> Token:
    """Verify `token` with the default base64url/JSON decoder and HMAC verifier."""
    return _default_use_case.execute(token, algorithm, secret, expected_claims)


def verify_result(
        token: str,
        algorithm: str,
        secret: Secret,
        expected_claims: ExpectedClaims = None,
) -> VerificationResult:
    return _default_use_case.execute_result(token, algorithm, secret, expected_claims)


def decode_unverified(token: str) -> Token:
    """Decode a token for inspection only. Nothing is verified."""
    return _default_use_case.decode(token)
