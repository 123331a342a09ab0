import hashlib
import hmac
from dataclasses import dataclass
from typing import Any, Callable, Dict

from ...domain.constants import SEGMENT_SEPARATOR
from ...domain.entities import Token
from ...domain.exceptions import UnsupportedAlgorithmError
from ...domain.ports import SignatureVerifier

_SEPARATOR_BYTE = SEGMENT_SEPARATOR.encode("ascii")


@dataclass(frozen=True, slots=True)
class MacAlgorithm:
    """A keyed-hash primitive and the size of the digest it produces."""
    name: str
    digestmod: Callable[..., Any]
    digest_size: int


_ALGORITHMS: Dict[str, MacAlgorithm] = {
    "HS256": MacAlgorithm("HS256", hashlib.sha256, 32),
    "HS384": MacAlgorithm("HS384", hashlib.sha384, 48),
    "HS512": MacAlgorithm("HS512", hashlib.sha512, 64),
}


def get_algorithm(name: str) -> MacAlgorithm:
    try:
        return _ALGORITHMS[name]
    except (KeyError, TypeError) as exc:
        raise UnsupportedAlgorithmError(name) from exc


def create_signature(
    algorithm: str,
    secret: bytes,
    header_segment: str,
    payload_segment: str,
) -> bytes:
    """
    MAC over the *encoded* segments: `header_b64 "." payload_b64`.

    Raises UnsupportedAlgorithmError for anything outside HS256/384/512.
    """
    mac_algorithm = get_algorithm(algorithm)
    mac = hmac.new(secret, digestmod=mac_algorithm.digestmod)
    mac.update(header_segment.encode("ascii"))
    mac.update(_SEPARATOR_BYTE)
    mac.update(payload_segment.encode("ascii"))
    return mac.digest()


def constant_time_equals(left: bytes, right: bytes) -> bool:
    """
    Compare two byte strings without leaking where they differ.

    Both buffers are padded to the longer length and compared in full, and
    the length check is folded in afterwards, so neither the position of
    the first mismatch nor a length difference ends the comparison early.
    """
    width = max(len(left), len(right))
    same_bytes = hmac.compare_digest(left.ljust(width, b"\0"), right.ljust(width, b"\0"))
    same_length = len(left) == len(right)
    return same_bytes & same_length


class HmacSignatureVerifier(SignatureVerifier):
    """
    Adapter implementing the SignatureVerifier port with the HMAC family.

    Never logs or exposes the secret or the computed digest.
    """

    def verify(self, algorithm: str, secret: bytes, token: Token) -> bool:
        expected = create_signature(
            algorithm,
            secret,
            token.header_segment,
            token.payload_segment,
        )
        return constant_time_equals(expected, token.signature)
