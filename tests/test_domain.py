# tests/test_domain.py
from datetime import datetime, timezone

import pytest

from pkg_jwt.domain.constants import Segment, ValidatedClaim
from pkg_jwt.domain.entities import HeaderView, PayloadView, Token
from pkg_jwt.domain.exceptions import (
    AlgorithmMismatchError,
    DecodeError,
    ErrorKind,
    InvalidClaimError,
    InvalidJsonError,
    MalformedTokenError,
    SignatureInvalidError,
    TokenError,
    VerificationError,
)
from pkg_jwt.domain.value_objects import (
    ClaimRequirement,
    VerificationResult,
    claim_requirements,
    require_jwt_id,
    require_subject,
)


def _token(**payload_fields) -> Token:
    return Token(
        header_segment="aGVhZGVy",
        payload_segment="cGF5bG9hZA",
        signature_segment="",
        header=HeaderView(algorithm="HS256", claims={"alg": "HS256", "x-tenant": "blue"}),
        payload=PayloadView(**payload_fields),
        signature=b"",
    )


def test_token_shortcuts():
    token = _token(subject="alice", claims={"sub": "alice", "role": "admin"})

    assert token.segments == ("aGVhZGVy", "cGF5bG9hZA", "")
    assert token.encoded == "aGVhZGVy.cGF5bG9hZA."
    assert token.signing_input == b"aGVhZGVy.cGF5bG9hZA"
    assert token.algorithm == "HS256"
    assert token.claims["role"] == "admin"
    assert token.header.claim("x-tenant") == "blue"
    assert token.header.claim("missing") is None
    assert token.payload.claim("role") == "admin"


def test_views_default_to_absent():
    header = HeaderView()
    payload = PayloadView()

    assert header.algorithm is None
    assert header.key_id is None
    assert payload.subject is None
    assert payload.expires_at is None
    assert dict(payload.claims) == {}


def test_views_are_immutable():
    payload = PayloadView(subject="alice")
    with pytest.raises(AttributeError):
        payload.subject = "mallory"  # type: ignore[misc]


def test_claim_requirements():
    requirements = claim_requirements({"sub": "alice", "jti": "42", "aud": "ignored"})
    assert requirements == (
        ClaimRequirement(ValidatedClaim.SUBJECT, "alice"),
        ClaimRequirement(ValidatedClaim.JWT_ID, "42"),
    )
    assert claim_requirements(None) == ()
    assert require_subject("alice") == ClaimRequirement(ValidatedClaim.SUBJECT, "alice")
    assert require_jwt_id("42") == ClaimRequirement(ValidatedClaim.JWT_ID, "42")

    # expected values stay out of repr
    assert "alice" not in repr(require_subject("alice"))


def test_error_families():
    assert isinstance(MalformedTokenError(4), DecodeError)
    assert isinstance(InvalidJsonError(Segment.HEADER, "boom"), DecodeError)
    assert isinstance(SignatureInvalidError(), VerificationError)
    assert isinstance(InvalidClaimError("sub"), VerificationError)
    assert not isinstance(SignatureInvalidError(), DecodeError)

    assert MalformedTokenError(4).is_decode_error
    assert not SignatureInvalidError().is_decode_error

    assert MalformedTokenError(4).kind is ErrorKind.MALFORMED_TOKEN
    assert AlgorithmMismatchError("HS512", "HS256").kind is ErrorKind.ALGORITHM_MISMATCH


def test_errors_support_pattern_matching():
    def describe(error: TokenError) -> str:
        match error:
            case MalformedTokenError(count):
                return f"parts={count}"
            case AlgorithmMismatchError(expected, actual):
                return f"{expected}!={actual}"
            case InvalidClaimError(name):
                return f"claim={name}"
            case _:
                return error.kind.value

    assert describe(MalformedTokenError(2)) == "parts=2"
    assert describe(AlgorithmMismatchError("HS512", "HS256")) == "HS512!=HS256"
    assert describe(InvalidClaimError("sub")) == "claim=sub"
    assert describe(SignatureInvalidError()) == "signature_invalid"


def test_verification_result():
    token = _token(issued_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    ok = VerificationResult(token=token)
    assert ok.ok
    assert ok.kind is None
    assert ok.unwrap() is token

    failed = VerificationResult(error=SignatureInvalidError())
    assert not failed.ok
    assert failed.kind is ErrorKind.SIGNATURE_INVALID
    with pytest.raises(SignatureInvalidError):
        failed.unwrap()
