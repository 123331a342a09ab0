from __future__ import annotations

from typing import Protocol

from .entities import Token
from .value_objects import TokenSegments


class ClaimDecoder(Protocol):
    """
    Port for turning raw segments into a decoded (not yet verified) token.

    Implementations live in the adapters layer (e.g. the base64url/JSON codec).
    """

    def decode(self, segments: TokenSegments) -> Token:
        """
        Raises:
          - InvalidEncodingError
          - InvalidJsonError
          - InvalidClaimFormatError
        """
        ...


class SignatureVerifier(Protocol):
    """Port for checking a token signature with a shared secret."""

    def verify(self, algorithm: str, secret: bytes, token: Token) -> bool:
        """
        Return True when the signature matches.

        Raises:
          - UnsupportedAlgorithmError
        """
        ...
