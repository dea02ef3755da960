"""Data models for the CLOB dashboard pipeline."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Market:
    id: str
    question: str = ""
    yes_price: float = 0.0  # outcomePrices[0]
    no_price: float = 0.0  # outcomePrices[1]
    volume: float = 0.0  # currency units traded
    liquidity: float = 0.0
    category: str = ""
    end_date: Optional[str] = None  # ISO-8601
    last_trade_price: Optional[float] = None
    best_bid: Optional[float] = None
    slug: str = ""
    has_outcome_prices: bool = True


@dataclass(frozen=True)
class Position:
    market_id: str
    outcome: str  # YES or NO
    size: float  # signed quantity
    entry_price: float = 0.0


@dataclass(frozen=True)
class Trade:
    id: str
    market_id: str = ""
    side: str = ""  # BUY or SELL
    outcome: str = ""
    size: float = 0.0
    price: float = 0.0
    timestamp: int = 0  # unix epoch seconds


@dataclass
class AnalyzedPosition:
    market_id: str
    question: str
    outcome: str
    size: float
    entry_price: float
    current_price: float
    pnl: float
    pnl_percent: Optional[float]  # None when entry_price is 0
    spread: float
    volume24h: float
    liquidity: float
    time_left: Optional[str]
    category: str
    is_winner: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "marketId": self.market_id,
            "question": self.question,
            "outcome": self.outcome,
            "size": self.size,
            "entryPrice": self.entry_price,
            "currentPrice": self.current_price,
            "pnl": self.pnl,
            "pnlPercent": self.pnl_percent,
            "spread": self.spread,
            "volume24h": self.volume24h,
            "liquidity": self.liquidity,
            "timeLeft": self.time_left,
            "category": self.category,
            "isWinner": self.is_winner,
        }


@dataclass
class Pattern(AnalyzedPosition):
    match_reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["matchReason"] = self.match_reason
        return data


@dataclass
class FetchResult:
    """Best-effort fetch outcome: data, or an empty degraded result with a reason."""
    items: list = field(default_factory=list)
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def failed(cls, reason: str) -> "FetchResult":
        return cls(items=[], degraded=True, reason=reason)

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class PortfolioStats:
    total_positions: int
    total_pnl: float
    win_rate: float  # percent
    wins: int
    losses: int
    avg_gain: float
    avg_loss: float
    profit_factor: float
    by_category: List[Dict[str, Any]]
    top_markets: List[Dict[str, Any]]
    positions: List[AnalyzedPosition]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalPositions": self.total_positions,
            "totalPnL": self.total_pnl,
            "winRate": self.win_rate,
            "wins": self.wins,
            "losses": self.losses,
            "avgGain": self.avg_gain,
            "avgLoss": self.avg_loss,
            "profitFactor": self.profit_factor,
            "byCategory": self.by_category,
            "topMarkets": self.top_markets,
            "positions": [p.to_dict() for p in self.positions],
        }


def to_float(value: Any, default: float = 0.0) -> float:
    """Lenient numeric parse: None, empty or malformed values become ``default``."""
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default
