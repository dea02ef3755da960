"""End-to-end tests for the fetch pipeline entry point."""

import json

import pytest
import requests

import config
import main
from collectors.snapshot import Snapshot
from conftest import make_market, make_position
from config import ConfigError, Credentials, load_credentials, require_credentials
from storage.models import FetchResult

ENV_VARS = (config.ENV_API_KEY, config.ENV_API_SECRET,
            config.ENV_API_PASSPHRASE, config.ENV_WALLET)


@pytest.fixture
def no_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def live_env(monkeypatch, creds):
    monkeypatch.setenv(config.ENV_API_KEY, creds.api_key)
    monkeypatch.setenv(config.ENV_API_SECRET, creds.api_secret)
    monkeypatch.setenv(config.ENV_API_PASSPHRASE, creds.api_passphrase)
    monkeypatch.setenv(config.ENV_WALLET, creds.wallet)


class TestCredentials:

    def test_load_from_mapping(self):
        creds = load_credentials({config.ENV_API_KEY: " k ", config.ENV_WALLET: "0x1"})
        assert creds.api_key == "k"
        assert creds.wallet == "0x1"
        assert creds.missing() == [config.ENV_API_SECRET, config.ENV_API_PASSPHRASE]
        assert not creds.complete

    def test_require_names_missing_vars(self):
        with pytest.raises(ConfigError, match="POLYMARKET_API_SECRET"):
            require_credentials(Credentials(api_key="k", api_passphrase="p"))


def test_demo_mode_without_credentials(no_env, tmp_path, capsys):
    out = tmp_path / "data.json"
    assert main.main(["--output", str(out)]) == 0

    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["summary"]["mode"] == "demo"
    assert report["summary"]["totalMarkets"] == 5
    assert "demo data" in capsys.readouterr().out


def test_strict_mode_fails_without_credentials(no_env, tmp_path, capsys):
    out = tmp_path / "data.json"
    assert main.main(["--strict", "--output", str(out)]) == 1
    assert "POLYMARKET_API_KEY" in capsys.readouterr().err
    assert not out.exists()


def test_live_run_writes_report(live_env, tmp_path, monkeypatch):
    calls = {}

    def fake_fetch_all(client, wallet, market_limit, trade_limit):
        calls.update(wallet=wallet, market_limit=market_limit, trade_limit=trade_limit)
        return Snapshot(
            markets=[make_market("m1", yes=0.6)],
            positions=FetchResult(items=[make_position("m1", size=10, entry=0.5)]),
            trades=FetchResult(items=[]),
        )

    monkeypatch.setattr(main, "fetch_all", fake_fetch_all)
    out = tmp_path / "data.json"

    assert main.main(["--output", str(out), "--market-limit", "50", "--policy", "narrow"]) == 0

    report = json.loads(out.read_text(encoding="utf-8"))
    assert calls == {"wallet": "0xabc", "market_limit": 50, "trade_limit": config.TRADE_LIMIT}
    assert report["summary"]["mode"] == "live"
    assert report["summary"]["policy"] == "narrow"
    assert report["stats"]["totalPnL"] == pytest.approx(1.0)


def test_market_fetch_failure_exits_nonzero(live_env, tmp_path, monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise requests.exceptions.ConnectionError("network down")

    monkeypatch.setattr(main, "fetch_all", boom)
    out = tmp_path / "data.json"

    assert main.main(["--output", str(out)]) == 1
    assert "Error: network down" in capsys.readouterr().err
    assert not out.exists()


def test_unknown_policy_exits_nonzero(no_env, tmp_path):
    assert main.main(["--demo", "--policy", "bogus", "--output", str(tmp_path / "d.json")]) == 1
