from __future__ import annotations

import os

from .settings import DEFAULT_ALGORITHM, DEFAULT_COOKIE_NAME, VerifierSettings

ENV_PREFIX = "PKG_JWT_"


def _parse_claims(raw: str | None) -> dict[str, str]:
    """
    Parse `name=value` pairs separated by commas, e.g. `sub=alice,jti=42`.
    """
    if not raw:
        return {}

    claims: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise RuntimeError(
                f"Invalid {ENV_PREFIX}EXPECTED_CLAIMS entry: expected name=value"
            )
        claims[name.strip()] = value.strip()
    return claims


def settings_from_env() -> VerifierSettings:
    secret = os.getenv(f"{ENV_PREFIX}SECRET")
    algorithm = os.getenv(f"{ENV_PREFIX}ALGORITHM") or DEFAULT_ALGORITHM
    if not secret:
        raise RuntimeError(f"Missing token verifier settings: {ENV_PREFIX}SECRET")

    return VerifierSettings(
        secret=secret.encode("utf-8"),
        algorithm=algorithm.strip(),
        expected_claims=_parse_claims(os.getenv(f"{ENV_PREFIX}EXPECTED_CLAIMS")),
        cookie_name=os.getenv(f"{ENV_PREFIX}COOKIE_NAME") or DEFAULT_COOKIE_NAME,
    )
