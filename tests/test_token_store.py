import pytest

from doctext.services.token_store import TokenStore, TokenUnavailableError


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


def test_token_without_expiry(clock):
    store = TokenStore(clock=clock)
    assert store.get_token() is None
    store.set_token("abc")
    clock.now += 10 ** 6
    assert store.get_token() == "abc"
    assert store.has_token()


def test_expired_token_is_cleared(clock):
    store = TokenStore(clock=clock)
    store.set_token("abc", expires_in_seconds=60)
    clock.now += 59
    assert store.get_token() == "abc"
    clock.now += 1
    assert store.get_token() is None
    assert not store.has_token()


def test_clear(clock):
    store = TokenStore(clock=clock)
    store.set_token("abc")
    store.clear()
    assert store.get_token() is None


def test_require_token_without_refresh_raises(clock):
    with pytest.raises(TokenUnavailableError):
        TokenStore(clock=clock).require_token()


def test_require_token_refreshes_expired_token(clock):
    calls = []

    def refresh():
        calls.append(clock.now)
        return f"token-{len(calls)}", 30

    store = TokenStore(refresh=refresh, clock=clock)
    assert store.require_token() == "token-1"
    assert store.require_token() == "token-1"
    clock.now += 30
    assert store.require_token() == "token-2"
    assert len(calls) == 2


def test_refresh_returning_nothing_raises(clock):
    store = TokenStore(refresh=lambda: ("", None), clock=clock)
    with pytest.raises(TokenUnavailableError):
        store.require_token()
