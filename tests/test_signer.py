"""Tests for HMAC request signing."""

from collectors.signer import build_signature, sign_request
from conftest import SECRET

TS = 1700000000000
PATH = "/data/positions?address=0xabc"


def test_known_vector():
    assert build_signature(SECRET, TS, "GET", PATH, "") == \
        "V/uEQmoX9oLlMxctat61FILKxUIOEuXG29wBRGFPn6E="


def test_known_vector_with_body():
    assert build_signature(SECRET, TS, "POST", "/order", '{"a":1}') == \
        "r5DxgKCEdq9Q+UrqvB1gWlcBKuf3smY/TNyOFsg6BxY="


def test_method_is_uppercased():
    assert build_signature(SECRET, TS, "get", PATH) == build_signature(SECRET, TS, "GET", PATH)


def test_deterministic():
    assert build_signature(SECRET, TS, "GET", PATH) == build_signature(SECRET, TS, "GET", PATH)


def test_each_field_changes_signature():
    base = build_signature(SECRET, TS, "GET", PATH, "")
    variants = [
        build_signature(SECRET, TS + 1, "GET", PATH, ""),
        build_signature(SECRET, TS, "POST", PATH, ""),
        build_signature(SECRET, TS, "GET", PATH + "d", ""),
        build_signature(SECRET, TS, "GET", PATH, "{}"),
        build_signature("b3RoZXItc2VjcmV0", TS, "GET", PATH, ""),
    ]
    assert base not in variants
    assert len(set(variants)) == len(variants)


def test_sign_request_headers(creds):
    headers = sign_request(creds, "GET", PATH, "", timestamp=TS)

    assert headers == {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-BAPI-TIMESTAMP": str(TS),
        "X-BAPI-API-KEY": "key-123",
        "X-BAPI-SIGN": "V/uEQmoX9oLlMxctat61FILKxUIOEuXG29wBRGFPn6E=",
        "X-BAPI-PASSPHRASE": "pass-456",
    }


def test_sign_request_defaults_timestamp_to_now(creds, monkeypatch):
    monkeypatch.setattr("collectors.signer.time.time", lambda: 1700000000.5)
    headers = sign_request(creds, "GET", PATH)
    assert headers["X-BAPI-TIMESTAMP"] == "1700000000500"
