import pytest

from pkg_jwt import (
    InvalidClaimError,
    VerifierSettings,
    create_token_verifier,
    create_token_verifier_from_env,
    settings_from_env,
)
from pkg_jwt.domain.constants import ValidatedClaim


def test_settings_hide_secret():
    settings = VerifierSettings(secret="s3cr3t-value")

    assert settings.secret == b"s3cr3t-value"
    assert settings.algorithm == "HS256"
    assert settings.cookie_name == "access_token"
    assert "s3cr3t-value" not in repr(settings)


def test_settings_reject_empty_secret():
    with pytest.raises(ValueError):
        VerifierSettings(secret=b"")


def test_settings_requirements():
    settings = VerifierSettings(secret=b"k", expected_claims={"sub": "alice", "aud": "x"})
    assert [r.claim for r in settings.requirements] == [ValidatedClaim.SUBJECT]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PKG_JWT_SECRET", "env-secret")
    monkeypatch.setenv("PKG_JWT_ALGORITHM", "HS512")
    monkeypatch.setenv("PKG_JWT_EXPECTED_CLAIMS", "sub=alice, jti=42,")
    monkeypatch.setenv("PKG_JWT_COOKIE_NAME", "session")

    settings = settings_from_env()

    assert settings.secret == b"env-secret"
    assert settings.algorithm == "HS512"
    assert settings.expected_claims == {"sub": "alice", "jti": "42"}
    assert settings.cookie_name == "session"


def test_settings_from_env_defaults(monkeypatch):
    monkeypatch.setenv("PKG_JWT_SECRET", "env-secret")
    for name in ("PKG_JWT_ALGORITHM", "PKG_JWT_EXPECTED_CLAIMS", "PKG_JWT_COOKIE_NAME"):
        monkeypatch.delenv(name, raising=False)

    settings = settings_from_env()

    assert settings.algorithm == "HS256"
    assert settings.expected_claims == {}
    assert settings.cookie_name == "access_token"


def test_settings_from_env_missing_secret(monkeypatch):
    monkeypatch.delenv("PKG_JWT_SECRET", raising=False)

    with pytest.raises(RuntimeError, match="PKG_JWT_SECRET"):
        settings_from_env()


def test_settings_from_env_bad_claims(monkeypatch):
    monkeypatch.setenv("PKG_JWT_SECRET", "env-secret")
    monkeypatch.setenv("PKG_JWT_EXPECTED_CLAIMS", "sub")

    with pytest.raises(RuntimeError, match="name=value"):
        settings_from_env()


# --- TokenVerifier facade -------------------------------------------------------


def test_token_verifier(make_token):
    verifier = create_token_verifier(secret=b"test-secret", expected_claims={"sub": "alice"})

    token = verifier.verify(make_token({"sub": "alice", "jti": "1"}))
    assert token.payload.subject == "alice"
    assert verifier.check_claims(token, [verifier.require_jwt_id("1")]) is token

    with pytest.raises(InvalidClaimError):
        verifier.check_claims(token, verifier.require_claims({"jti": "2"}))

    result = verifier.verify_result(make_token({"sub": "bob"}))
    assert isinstance(result.error, InvalidClaimError)


def test_token_verifier_from_env(monkeypatch, make_token):
    monkeypatch.setenv("PKG_JWT_SECRET", "test-secret")
    monkeypatch.setenv("PKG_JWT_ALGORITHM", "HS384")
    monkeypatch.delenv("PKG_JWT_EXPECTED_CLAIMS", raising=False)

    verifier = create_token_verifier_from_env()

    assert verifier.verify(make_token({"sub": "alice"}, algorithm="HS384")).payload.subject == "alice"
