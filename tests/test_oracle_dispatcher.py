"""Outbound dispatch to the oracle over HTTP, with requests.post stubbed."""

import pytest
import requests

from utils import oracle
from utils.errors import OracleUnavailable
from utils.oracle import HttpQueryDispatcher, LocalQueryDispatcher, build_dispatcher


class FakeResponse:
    def __init__(self, status_code, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(oracle.time, "sleep", lambda seconds: None)


def _dispatcher(**kwargs):
    return HttpQueryDispatcher(
        url="https://oracle.example/queries",
        callback_url="https://verses.example/api/oracle/callback",
        api_key="key",
        **kwargs,
    )


def test_dispatch_posts_reference_and_gas_limit(monkeypatch):
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append((url, headers, json, timeout))
        return FakeResponse(202, {"query_id": "0xabc"})

    monkeypatch.setattr(oracle.requests, "post", fake_post)

    assert _dispatcher(timeout=5).dispatch("John/3/16", 500000) == "0xabc"

    url, headers, body, timeout = calls[0]
    assert url == "https://oracle.example/queries"
    assert headers["Authorization"] == "Bearer key"
    assert body == {
        "reference": "John/3/16",
        "gas_limit": 500000,
        "callback_url": "https://verses.example/api/oracle/callback",
    }
    assert timeout == 5


def test_dispatch_retries_busy_oracle(monkeypatch):
    replies = [FakeResponse(503, text="busy"), FakeResponse(429, text="slow down"), FakeResponse(200, {"query_id": "0x1"})]
    monkeypatch.setattr(oracle.requests, "post", lambda *args, **kwargs: replies.pop(0))

    assert _dispatcher(max_retries=3).dispatch("John/3/16", 1) == "0x1"
    assert replies == []


def test_dispatch_gives_up_after_max_retries(monkeypatch):
    attempts = []

    def unreachable(*args, **kwargs):
        attempts.append(1)
        raise requests.ConnectionError("down")

    monkeypatch.setattr(oracle.requests, "post", unreachable)

    with pytest.raises(OracleUnavailable):
        _dispatcher(max_retries=2).dispatch("John/3/16", 1)
    assert len(attempts) == 3


def test_dispatch_does_not_retry_a_rejection(monkeypatch):
    attempts = []

    def rejected(*args, **kwargs):
        attempts.append(1)
        return FakeResponse(400, text="bad reference")

    monkeypatch.setattr(oracle.requests, "post", rejected)

    with pytest.raises(OracleUnavailable):
        _dispatcher().dispatch("John/3/16", 1)
    assert len(attempts) == 1


@pytest.mark.parametrize("payload", [None, {}, {"query_id": ""}])
def test_dispatch_requires_a_query_id(monkeypatch, payload):
    monkeypatch.setattr(oracle.requests, "post", lambda *args, **kwargs: FakeResponse(200, payload))

    with pytest.raises(OracleUnavailable):
        _dispatcher().dispatch("John/3/16", 1)


def test_local_dispatcher_issues_distinct_ids():
    local = LocalQueryDispatcher()

    first = local.dispatch("John/3/16", 10)
    second = local.dispatch("John/3/16", 10)

    assert first != second
    assert first.startswith("0x") and len(first) == 66
    assert local.dispatched[first] == ("John/3/16", 10)


def test_build_dispatcher_follows_oracle_mode():
    assert isinstance(build_dispatcher({"ORACLE_MODE": "local"}), LocalQueryDispatcher)

    http = build_dispatcher({
        "ORACLE_MODE": "http",
        "ORACLE_URL": "https://oracle.example/queries",
        "ORACLE_CALLBACK_URL": "https://verses.example/api/oracle/callback",
        "ORACLE_MAX_RETRIES": 1,
    })
    assert isinstance(http, HttpQueryDispatcher)
    assert http.max_retries == 1

    with pytest.raises(ValueError):
        build_dispatcher({"ORACLE_MODE": "carrier-pigeon"})
