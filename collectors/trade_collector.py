"""Collect recent trade history for a wallet (best-effort)."""

from typing import List

import requests

import config
from collectors.api_client import ClobClient
from storage.models import FetchResult, Trade, to_float


def _parse_trade(raw: dict) -> Trade:
    """Convert a trade API record to a Trade model."""
    return Trade(
        id=str(raw.get("id", raw.get("transactionHash", ""))),
        market_id=str(raw.get("marketId", raw.get("market", ""))),
        side=raw.get("side", ""),
        outcome=raw.get("outcome", ""),
        size=to_float(raw.get("size")),
        price=to_float(raw.get("price")),
        timestamp=int(to_float(raw.get("timestamp"))),
    )


def parse_trades(records: list) -> List[Trade]:
    return [_parse_trade(raw) for raw in records if isinstance(raw, dict)]


def fetch_trades(client: ClobClient, wallet: str,
                 limit: int = config.TRADE_LIMIT) -> FetchResult:
    """Fetch up to ``limit`` trades for the wallet.

    Same contract as positions: empty without a wallet, degraded-empty on error.
    """
    if not wallet:
        return FetchResult()

    path = f"/data/trades?address={wallet}&limit={limit}"
    try:
        data = client.get(path)
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"  Warning: could not fetch trades ({e})")
        return FetchResult.failed(f"trades: {e}")

    records = []
    if isinstance(data, dict):
        records = data.get("trades") or data.get("data") or []
    return FetchResult(items=parse_trades(records))
