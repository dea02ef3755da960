"""Embedded sample markets and positions for demo mode (no credentials)."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from collectors.market_collector import parse_markets
from collectors.position_collector import parse_positions
from collectors.snapshot import Snapshot
from storage.models import FetchResult, Market, Position

# (id, slug, question, yes, no, volume, liquidity, category, days until end)
_MARKETS = [
    ("demo1", "will-bitcoin-hit-100k-before-june-2025",
     "Will Bitcoin hit $100k before June 2025?",
     "0.485", "0.515", 1250000, 50000, "Crypto", 7),
    ("demo2", "will-fed-raise-rates-in-march",
     "Will Fed raise rates in March meeting?",
     "0.520", "0.480", 890000, 75000, "Elections", 30),
    ("demo3", "will-ethereum-reach-5k-by-end-of-2025",
     "Will Ethereum reach $5k by end of 2025?",
     "0.320", "0.680", 2100000, 120000, "Crypto", 200),
    ("demo4", "will-trump-win-2024-election",
     "Will Trump win 2024 election?",
     "0.550", "0.450", 3500000, 200000, "Elections", 60),
    ("demo5", "will-leeds-win-premier-league-2025-26",
     "Will Leeds win the 2025–26 English Premier League?",
     "0.180", "0.820", 36590082, 857016, "Sports", 150),
]

_POSITIONS = [
    {"marketId": "demo1", "outcome": "YES", "size": 100, "entryPrice": 0.470},
    {"marketId": "demo2", "outcome": "NO", "size": 150, "entryPrice": 0.520},
    {"marketId": "demo3", "outcome": "YES", "size": 200, "entryPrice": 0.310},
]


def demo_markets(now: Optional[datetime] = None) -> List[Market]:
    """Sample markets with end dates relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    records = []
    for (mid, slug, question, yes, no, volume, liquidity,
         category, days) in _MARKETS:
        records.append({
            "id": mid,
            "slug": slug,
            "question": question,
            "outcomePrices": [yes, no],
            "volume": volume,
            "liquidity": liquidity,
            "category": category,
            "endDate": (now + timedelta(days=days)).isoformat(),
        })
    return parse_markets(records)


def demo_positions() -> List[Position]:
    return parse_positions(_POSITIONS)


def demo_snapshot(now: Optional[datetime] = None) -> Snapshot:
    """Same shape as a live fetch, so the live analytics run unchanged."""
    return Snapshot(
        markets=demo_markets(now),
        positions=FetchResult(items=demo_positions()),
        trades=FetchResult(),
    )
