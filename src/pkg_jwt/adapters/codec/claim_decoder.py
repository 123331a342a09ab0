import binascii
import json
import re
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from jwt.utils import base64url_decode

from ...domain.constants import HeaderClaim, PayloadClaim, Segment
from ...domain.entities import HeaderView, PayloadView, Token
from ...domain.exceptions import (
    InvalidClaimFormatError,
    InvalidEncodingError,
    InvalidJsonError,
)
from ...domain.ports import ClaimDecoder
from ...domain.value_objects import TokenSegments

# Unpadded base64url alphabet. The codec itself silently skips characters
# outside the alphabet, so they are rejected up front.
_BASE64URL = re.compile(r"[A-Za-z0-9_-]*")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class SegmentClaimDecoder(ClaimDecoder):
    """
    Adapter implementing the ClaimDecoder port with base64url + JSON.

    - header / payload: base64url -> bytes -> JSON object -> typed view
    - signature: base64url -> raw bytes
    """

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, segments: TokenSegments) -> Token:
        header_claims = self._decode_json(segments.header, Segment.HEADER)
        payload_claims = self._decode_json(segments.payload, Segment.PAYLOAD)
        signature = decode_segment(segments.signature, Segment.SIGNATURE)

        return Token(
            header_segment=segments.header,
            payload_segment=segments.payload,
            signature_segment=segments.signature,
            header=build_header(header_claims),
            payload=build_payload(payload_claims),
            signature=signature,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _decode_json(segment: str, label: Segment) -> Mapping[str, Any]:
        raw = decode_segment(segment, label)
        try:
            claims = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise InvalidJsonError(label, str(exc)) from exc

        if not isinstance(claims, dict):
            raise InvalidJsonError(label, f"expected an object, got {type(claims).__name__}")
        return MappingProxyType(claims)


def decode_segment(segment: str, label: Segment) -> bytes:
    """Base64url-decode one segment, raising InvalidEncodingError on failure."""
    if not _BASE64URL.fullmatch(segment):
        raise InvalidEncodingError(label)
    try:
        return base64url_decode(segment)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(label) from exc


def build_header(claims: Mapping[str, Any]) -> HeaderView:
    return HeaderView(
        algorithm=claims.get(HeaderClaim.ALGORITHM.value),
        type=claims.get(HeaderClaim.TYPE.value),
        content_type=claims.get(HeaderClaim.CONTENT_TYPE.value),
        key_id=claims.get(HeaderClaim.KEY_ID.value),
        claims=claims,
    )


def build_payload(claims: Mapping[str, Any]) -> PayloadView:
    return PayloadView(
        issuer=claims.get(PayloadClaim.ISSUER.value),
        subject=claims.get(PayloadClaim.SUBJECT.value),
        audience=claims.get(PayloadClaim.AUDIENCE.value),
        jwt_id=claims.get(PayloadClaim.JWT_ID.value),
        expires_at=_parse_instant(claims, PayloadClaim.EXPIRES_AT),
        not_before=_parse_instant(claims, PayloadClaim.NOT_BEFORE),
        issued_at=_parse_instant(claims, PayloadClaim.ISSUED_AT),
        claims=claims,
    )


def _parse_instant(claims: Mapping[str, Any], claim: PayloadClaim) -> Optional[datetime]:
    """
    Parse a NumericDate claim given as integer seconds since the epoch.

    Absent -> None. Present but not a base-10 integer (including null,
    booleans and fractional numbers) -> InvalidClaimFormatError.
    """
    if claim.value not in claims:
        return None

    raw = claims[claim.value]
    is_integer = isinstance(raw, int) and not isinstance(raw, bool)
    if not is_integer and not (isinstance(raw, str) and _INTEGER.fullmatch(raw)):
        raise InvalidClaimFormatError(claim.value)

    try:
        return datetime.fromtimestamp(int(raw), tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidClaimFormatError(claim.value) from exc

