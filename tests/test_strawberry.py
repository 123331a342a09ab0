import asyncio
from types import SimpleNamespace

import pytest
from graphql import GraphQLError
from starlette.requests import Request

from pkg_jwt.integrations.strawberry import StrawberryTokenContext, create_strawberry_auth


def _request(headers=None, cookies=None) -> Request:
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    if cookies:
        cookie = "; ".join(f"{k}={v}" for k, v in cookies.items())
        raw_headers.append((b"cookie", cookie.encode()))
    return Request({"type": "http", "method": "POST", "path": "/graphql", "headers": raw_headers})


@pytest.fixture
def strawberry_auth():
    return create_strawberry_auth(secret=b"test-secret")


def test_context_getter_with_bearer(strawberry_auth, make_token):
    getter = strawberry_auth.make_context_getter()
    request = _request({"Authorization": f"Bearer {make_token({'sub': 'alice'})}"})

    ctx = asyncio.run(getter(request))

    assert isinstance(ctx, StrawberryTokenContext)
    assert ctx.token.payload.subject == "alice"


def test_context_getter_with_cookie_and_extra(strawberry_auth, make_token):
    getter = strawberry_auth.make_context_getter(
        extra_factory=lambda request, token: token.payload.subject if token else None,
    )
    request = _request(cookies={"access_token": make_token({"sub": "alice"})})

    ctx = asyncio.run(getter(request))

    assert ctx.extra == "alice"


def test_context_getter_optional(strawberry_auth, make_token):
    getter = strawberry_auth.make_context_getter(optional=True)
    forged = make_token({"sub": "alice"}, secret=b"attacker")

    assert asyncio.run(getter(_request())).token is None
    assert asyncio.run(getter(_request({"Authorization": f"Bearer {forged}"}))).token is None


def test_context_getter_required(strawberry_auth, make_token):
    getter = strawberry_auth.make_context_getter(optional=False)
    forged = make_token({"sub": "alice"}, secret=b"attacker")

    with pytest.raises(GraphQLError, match="Not authenticated"):
        asyncio.run(getter(_request()))
    with pytest.raises(GraphQLError, match="signature"):
        asyncio.run(getter(_request({"Authorization": f"Bearer {forged}"})))


def test_permissions(strawberry_auth, make_token):
    ctx = asyncio.run(
        strawberry_auth.make_context_getter()(
            _request({"Authorization": f"Bearer {make_token({'sub': 'alice'})}"})
        )
    )
    anonymous = StrawberryTokenContext(request=_request())

    authenticated = strawberry_auth.require_authenticated()()
    assert authenticated.has_permission(None, SimpleNamespace(context=ctx))
    assert not authenticated.has_permission(None, SimpleNamespace(context=anonymous))

    is_alice = strawberry_auth.require_claims({"sub": "alice"})()
    assert is_alice.has_permission(None, SimpleNamespace(context=ctx))

    is_bob = strawberry_auth.require_claims({"sub": "bob"})()
    assert not is_bob.has_permission(None, SimpleNamespace(context=ctx))
    assert "sub" in is_bob.message

    assert not is_bob.has_permission(None, SimpleNamespace(context=anonymous))
    assert is_bob.message == "Authentication required"
