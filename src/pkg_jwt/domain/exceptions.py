from __future__ import annotations

from enum import Enum
from typing import ClassVar, Optional

from .constants import Segment


class ErrorKind(Enum):
    # decode
    MALFORMED_TOKEN = "malformed_token"
    INVALID_ENCODING = "invalid_encoding"
    INVALID_JSON = "invalid_json"
    INVALID_CLAIM_FORMAT = "invalid_claim_format"
    # verification
    ALGORITHM_MISMATCH = "algorithm_mismatch"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    SIGNATURE_INVALID = "signature_invalid"
    INVALID_CLAIM = "invalid_claim"


class TokenError(Exception):
    """
    Base class for every token failure.

    Each concrete error carries an `ErrorKind` and its details as plain
    attributes, so callers can either catch a family or `match` on the
    error object. Messages never contain secrets, signatures or claim
    values.
    """
    kind: ClassVar[ErrorKind]

    @property
    def is_decode_error(self) -> bool:
        return isinstance(self, DecodeError)


class DecodeError(TokenError):
    """Raised when the token is structurally invalid."""
    pass


class VerificationError(TokenError):
    """Raised when a well-formed token fails a policy or crypto check."""
    pass


# --- Decode errors --------------------------------------------------------


class MalformedTokenError(DecodeError):
    kind = ErrorKind.MALFORMED_TOKEN
    __match_args__ = ("part_count",)

    def __init__(self, part_count: int) -> None:
        self.part_count = part_count
        super().__init__(
            f"The token was expected to have 3 parts, but got {part_count}"
        )


class InvalidEncodingError(DecodeError):
    kind = ErrorKind.INVALID_ENCODING
    __match_args__ = ("segment",)

    def __init__(self, segment: Segment) -> None:
        self.segment = segment
        super().__init__(f"The {segment.value} segment is not valid base64url")


class InvalidJsonError(DecodeError):
    kind = ErrorKind.INVALID_JSON
    __match_args__ = ("segment", "message")

    def __init__(self, segment: Segment, message: str) -> None:
        self.segment = segment
        self.message = message
        super().__init__(
            f"The {segment.value} segment is not a valid JSON object: {message}"
        )


class InvalidClaimFormatError(DecodeError):
    kind = ErrorKind.INVALID_CLAIM_FORMAT
    __match_args__ = ("claim",)

    def __init__(self, claim: str) -> None:
        self.claim = claim
        super().__init__(
            f"The claim {claim!r} must be an integer number of seconds since the epoch"
        )


# --- Verification errors --------------------------------------------------


class AlgorithmMismatchError(VerificationError):
    kind = ErrorKind.ALGORITHM_MISMATCH
    __match_args__ = ("expected", "actual")

    def __init__(self, expected: str, actual: Optional[str]) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"The provided algorithm {expected!r} doesn't match "
            f"the one defined in the token header ({actual!r})"
        )


class UnsupportedAlgorithmError(VerificationError):
    kind = ErrorKind.UNSUPPORTED_ALGORITHM
    __match_args__ = ("name",)

    def __init__(self, name: Optional[str]) -> None:
        self.name = name
        super().__init__(f"Unsupported algorithm: {name!r}")


class SignatureInvalidError(VerificationError):
    kind = ErrorKind.SIGNATURE_INVALID

    def __init__(self) -> None:
        super().__init__("The token signature is invalid")


class InvalidClaimError(VerificationError):
    kind = ErrorKind.INVALID_CLAIM
    __match_args__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"The claim {name!r} value doesn't match the required one")
