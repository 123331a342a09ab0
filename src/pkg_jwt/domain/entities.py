from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from .constants import SEGMENT_SEPARATOR


def _no_claims() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class HeaderView:
    """
    Decoded claims of the header segment.

    Well-known fields are exposed as attributes; everything else is
    reachable through `claims` / `claim()`.
    """
    algorithm: Optional[str] = None
    type: Optional[str] = None
    content_type: Optional[str] = None
    key_id: Optional[str] = None
    claims: Mapping[str, Any] = field(default_factory=_no_claims, compare=False)

    def claim(self, name: str) -> Any:
        return self.claims.get(name)


@dataclass(frozen=True, slots=True)
class PayloadView:
    """
    Decoded claims of the payload segment.

    Time claims are timezone-aware UTC instants. They are decoded but
    never compared against the current time here; enforcing `exp` and
    `nbf` is left to the calling application.
    """
    issuer: Optional[str] = None
    subject: Optional[str] = None
    audience: Optional[str] = None
    jwt_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    not_before: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    claims: Mapping[str, Any] = field(default_factory=_no_claims, compare=False)

    def claim(self, name: str) -> Any:
        return self.claims.get(name)


@dataclass(frozen=True, slots=True)
class Token:
    """
    A decoded token: the three raw segments plus their decoded views.

    Only ever handed out after every check has passed, or kept internal
    while the checks run.
    """
    header_segment: str
    payload_segment: str
    signature_segment: str
    header: HeaderView
    payload: PayloadView
    signature: bytes = field(repr=False)

    # --- Read-only shortcuts ----------------------------------------------

    @property
    def segments(self) -> Tuple[str, str, str]:
        return self.header_segment, self.payload_segment, self.signature_segment

    @property
    def encoded(self) -> str:
        return SEGMENT_SEPARATOR.join(self.segments)

    @property
    def signing_input(self) -> bytes:
        """The exact bytes covered by the signature: `header.payload`."""
        return f"{self.header_segment}{SEGMENT_SEPARATOR}{self.payload_segment}".encode("ascii")

    @property
    def algorithm(self) -> Optional[str]:
        return self.header.algorithm

    @property
    def claims(self) -> Mapping[str, Any]:
        return self.payload.claims
