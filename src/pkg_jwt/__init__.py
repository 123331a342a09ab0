"""
pkg_jwt

Clean-architecture verification core for compact HMAC-signed tokens
(`header.payload.signature`) that can be integrated with multiple
frameworks (FastAPI, Strawberry, etc.).

Only HS256, HS384 and HS512 are accepted. `exp`, `nbf` and `iat` are
decoded but not enforced; checking them against the clock is up to the
calling application.
"""

__version__ = "0.1.0"

from .domain.entities import HeaderView, PayloadView, Token
from .domain.constants import HeaderClaim, PayloadClaim, Segment, ValidatedClaim
from .domain.exceptions import (
    ErrorKind,
    TokenError,
    DecodeError,
    VerificationError,
    MalformedTokenError,
    InvalidEncodingError,
    InvalidJsonError,
    InvalidClaimFormatError,
    AlgorithmMismatchError,
    UnsupportedAlgorithmError,
    SignatureInvalidError,
    InvalidClaimError,
)
from .domain.value_objects import (
    TokenSegments,
    ClaimRequirement,
    VerificationResult,
    claim_requirements,
    require_subject,
    require_jwt_id,
)
from .domain.ports import ClaimDecoder, SignatureVerifier

from .application.use_cases.verify import (
    VerifyTokenUseCase,
    verify,
    verify_result,
    decode_unverified,
)
from .application.use_cases.validate_claims import ValidateClaimsUseCase

from .adapters.codec.tokenizer import split_token
from .adapters.codec.claim_decoder import SegmentClaimDecoder
from .adapters.crypto.signature import HmacSignatureVerifier, constant_time_equals

from .settings import VerifierSettings
from .env import settings_from_env
from .integrations.common.verifier_factory import (
    TokenVerifier,
    create_token_verifier,
    create_token_verifier_from_env,
)

__all__ = [
    "__version__",
    # domain core
    "Token",
    "HeaderView",
    "PayloadView",
    "HeaderClaim",
    "PayloadClaim",
    "Segment",
    "ValidatedClaim",
    "TokenSegments",
    "ClaimRequirement",
    "VerificationResult",
    "claim_requirements",
    "require_subject",
    "require_jwt_id",
    "ClaimDecoder",
    "SignatureVerifier",
    # exceptions
    "ErrorKind",
    "TokenError",
    "DecodeError",
    "VerificationError",
    "MalformedTokenError",
    "InvalidEncodingError",
    "InvalidJsonError",
    "InvalidClaimFormatError",
    "AlgorithmMismatchError",
    "UnsupportedAlgorithmError",
    "SignatureInvalidError",
    "InvalidClaimError",
    # use cases
    "VerifyTokenUseCase",
    "ValidateClaimsUseCase",
    "verify",
    "verify_result",
    "decode_unverified",
    # adapters
    "split_token",
    "SegmentClaimDecoder",
    "HmacSignatureVerifier",
    "constant_time_equals",
    # configuration
    "VerifierSettings",
    "settings_from_env",
    "TokenVerifier",
    "create_token_verifier",
    "create_token_verifier_from_env",
]
