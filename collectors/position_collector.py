"""Collect open positions for a wallet (best-effort)."""

from typing import List

import requests

from collectors.api_client import ClobClient
from storage.models import FetchResult, Position, to_float


def _parse_position(raw: dict) -> Position:
    """Convert a position API record to a Position model."""
    outcome = raw.get("outcome") or ("YES" if raw.get("side") == "YES" else "NO")
    return Position(
        market_id=str(raw.get("marketId", raw.get("market", ""))),
        outcome=outcome,
        size=to_float(raw.get("size")),
        entry_price=to_float(raw.get("entryPrice")),
    )


def parse_positions(records: list) -> List[Position]:
    return [_parse_position(raw) for raw in records if isinstance(raw, dict)]


def fetch_positions(client: ClobClient, wallet: str) -> FetchResult:
    """Fetch the wallet's positions.

    Without a wallet this returns an empty, non-degraded result. Fetch
    failures are reported as a degraded empty result instead of raising.
    """
    if not wallet:
        return FetchResult()

    path = f"/data/positions?address={wallet}"
    try:
        data = client.get(path)
    except (requests.exceptions.RequestException, ValueError) as e:
        print(f"  Warning: could not fetch positions ({e})")
        return FetchResult.failed(f"positions: {e}")

    records = []
    if isinstance(data, dict):
        records = data.get("positions") or data.get("data") or []
    return FetchResult(items=parse_positions(records))
