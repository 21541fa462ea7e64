import json

import pytest

from conftest import FakeRedis
from storefront.domain.entities import Identity
from storefront.domain.errors import AccessDeniedError, NotAuthenticatedError
from storefront.services.access import require_admin_session
from storefront.services.session_store import SessionStore


def test_missing_identity_is_not_authenticated():
    with pytest.raises(NotAuthenticatedError):
        require_admin_session(None)


def test_not_authenticated_is_an_access_denial():
    with pytest.raises(AccessDeniedError):
        require_admin_session(None)
    with pytest.raises(PermissionError):
        require_admin_session(None)


def test_non_admin_is_denied():
    with pytest.raises(AccessDeniedError) as exc:
        require_admin_session(Identity(user_id=1, is_admin=False))
    assert not isinstance(exc.value, NotAuthenticatedError)


def test_admin_gets_identity_back():
    identity = Identity(user_id=1, is_admin=True)
    assert require_admin_session(identity) is identity


def test_session_round_trip():
    store = SessionStore(client=FakeRedis(), ttl=30)
    token = store.issue(5, is_admin=True)

    assert store.resolve(token) == Identity(user_id=5, is_admin=True)
    assert store.redis.ttls[f"session:{token}"] == 30


def test_unknown_or_empty_token_resolves_to_none():
    store = SessionStore(client=FakeRedis())

    assert store.resolve(None) is None
    assert store.resolve("") is None
    assert store.resolve("nope") is None


def test_revoked_session_is_gone():
    store = SessionStore(client=FakeRedis())
    token = store.issue(5)

    assert store.revoke(token) is True
    assert store.resolve(token) is None
    assert store.revoke(token) is False


def test_malformed_session_payload_is_ignored():
    redis = FakeRedis()
    store = SessionStore(client=redis)
    redis.data["session:broken"] = "not json"
    redis.data["session:partial"] = json.dumps({"is_admin": True})

    assert store.resolve("broken") is None
    assert store.resolve("partial") is None
