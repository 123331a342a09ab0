import hashlib
import hmac
import json
from typing import Any, Callable, Dict, Optional

import pytest
from jwt.utils import base64url_encode

_DIGESTS = {"HS256": hashlib.sha256, "HS384": hashlib.sha384, "HS512": hashlib.sha512}


def encode_segment(data: Any) -> str:
    raw = data if isinstance(data, bytes) else json.dumps(data, separators=(",", ":")).encode()
    return base64url_encode(raw).decode("ascii")


def sign(header_segment: str, payload_segment: str, secret: bytes, algorithm: str) -> str:
    mac = hmac.new(secret, f"{header_segment}.{payload_segment}".encode(), _DIGESTS[algorithm])
    return base64url_encode(mac.digest()).decode("ascii")


@pytest.fixture
def make_token() -> Callable[..., str]:
    def _make(
            payload: Any,
            *,
            secret: bytes = b"test-secret",
            algorithm: str = "HS256",
            header: Optional[Dict[str, Any]] = None,
            sign_with: Optional[str] = None,
    ) -> str:
        header_segment = encode_segment(header if header is not None else {"alg": algorithm, "typ": "JWT"})
        payload_segment = encode_segment(payload)
        signature = sign(header_segment, payload_segment, secret, sign_with or algorithm)
        return f"{header_segment}.{payload_segment}.{signature}"

    return _make
