"""Shared fixtures: synthetic credentials, a fixed clock, and stub HTTP plumbing."""

from datetime import datetime, timedelta, timezone

import pytest

from config import Credentials
from storage.models import Market, Position

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

# base64("secret-key-for-tests")
SECRET = "c2VjcmV0LWtleS1mb3ItdGVzdHM="


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def creds() -> Credentials:
    return Credentials(
        api_key="key-123",
        api_secret=SECRET,
        api_passphrase="pass-456",
        wallet="0xabc",
    )


def make_market(mid="m1", yes=0.5, volume=100_000.0, category="Crypto",
                days=5, **kwargs) -> Market:
    end = (NOW + timedelta(days=days)).isoformat() if days is not None else None
    return Market(
        id=mid,
        question=kwargs.pop("question", f"Question {mid}?"),
        yes_price=yes,
        no_price=round(1 - yes, 6),
        volume=volume,
        liquidity=kwargs.pop("liquidity", 10_000.0),
        category=category,
        end_date=end,
        **kwargs,
    )


def make_position(mid="m1", size=100.0, entry=0.5, outcome="YES") -> Position:
    return Position(market_id=mid, outcome=outcome, size=size, entry_price=entry)


class StubClient:
    """Stands in for ClobClient: maps a path prefix to a payload or an exception."""

    def __init__(self, routes, paths=None):
        self.routes = routes
        self.paths = [] if paths is None else paths
        self.forks = []
        self.closed = False

    def fork(self):
        child = StubClient(self.routes, self.paths)
        self.forks.append(child)
        return child

    def close(self):
        self.closed = True

    def get(self, path):
        self.paths.append(path)
        for prefix, result in self.routes.items():
            if path.startswith(prefix):
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"unexpected path {path}")


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.headers = {}
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.response

    def close(self):
        self.closed = True
