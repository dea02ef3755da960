"""Fetch active markets from the CLOB API."""

import json
from typing import List, Optional

import config
from collectors.api_client import ClobClient
from storage.models import Market, to_float


def _optional_price(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return to_float(value)


def _parse_market(raw: dict) -> Market:
    """Convert a CLOB API market record to a Market model."""
    # outcomePrices may arrive double-encoded as a JSON string
    prices = raw.get("outcomePrices") or []
    if isinstance(prices, str):
        try:
            prices = json.loads(prices)
        except (json.JSONDecodeError, TypeError):
            prices = []
    if not isinstance(prices, list):
        prices = []

    return Market(
        id=str(raw.get("id", raw.get("condition_id", ""))),
        question=raw.get("question") or "",
        yes_price=to_float(prices[0]) if len(prices) > 0 else 0.0,
        no_price=to_float(prices[1]) if len(prices) > 1 else 0.0,
        volume=to_float(raw.get("volume")),
        liquidity=to_float(raw.get("liquidity")),
        category=raw.get("category") or "",
        end_date=raw.get("endDate") or None,
        last_trade_price=_optional_price(raw.get("lastTradePrice")),
        best_bid=_optional_price(raw.get("bestBid")),
        slug=raw.get("slug") or "",
        has_outcome_prices=len(prices) > 0,
    )


def parse_markets(records: list) -> List[Market]:
    return [_parse_market(raw) for raw in records if isinstance(raw, dict)]


def fetch_markets(client: ClobClient, limit: int = config.MARKET_LIMIT) -> List[Market]:
    """Fetch active, non-closed markets.

    Markets are required for any analysis, so errors propagate to the caller.
    """
    path = f"/data?limit={limit}&active=true&closed=false"
    data = client.get(path)

    records = []
    if isinstance(data, dict):
        records = data.get("data") or data.get("markets") or []
    return parse_markets(records)
