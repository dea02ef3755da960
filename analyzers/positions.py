"""Per-position analytics: P&L, spread, time remaining, and pattern matching."""

import math
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import pandas as pd

from analyzers.policy import PatternPolicy
from storage.models import AnalyzedPosition, Market, Pattern, Position

EXPIRED = 'Expirado'
DEFAULT_CATEGORY = 'Other'
DEFAULT_QUESTION = 'Untitled'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an end date; naive values are taken as UTC."""
    if not isinstance(value, str):
        return None
    ts = pd.to_datetime(value.strip(), utc=True, errors='coerce')
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def calculate_time_left(end_date: Optional[str],
                        now: Optional[datetime] = None) -> Optional[str]:
    """Human-readable time until ``end_date``: '5d', '17h' or 'Expirado'.

    Whole days are reported only when more than 24 hours remain. Both units
    are floored.
    """
    if not end_date:
        return None
    end = _parse_timestamp(end_date)
    if end is None:
        return None

    diff = (end - (now or _utcnow())).total_seconds()
    if diff <= 0:
        return EXPIRED
    hours = math.floor(diff / 3600)
    if hours > 24:
        return f'{hours // 24}d'
    return f'{hours}h'


def spread_of(market: Market) -> float:
    """Distance of the yes-price from 50%, scaled to [0, 1].

    A market without outcome prices has spread 0.
    """
    if not market.has_outcome_prices:
        return 0.0
    return abs(market.yes_price - 0.5) * 2


def current_price_of(market: Market) -> float:
    for price in (market.last_trade_price, market.best_bid):
        if price is not None:
            return price
    return market.yes_price or 0.0


def analyze_position(position: Position, market: Market,
                     now: Optional[datetime] = None) -> AnalyzedPosition:
    size = position.size
    entry_price = position.entry_price
    current_price = current_price_of(market)
    pnl = size * (current_price - entry_price)
    # Undefined without a usable entry price; kept out of percent aggregates
    pnl_percent = None
    if entry_price:
        pnl_percent = (current_price - entry_price) / entry_price * 100
        if not math.isfinite(pnl_percent):
            pnl_percent = None

    return AnalyzedPosition(
        market_id=market.id,
        question=market.question or DEFAULT_QUESTION,
        outcome=position.outcome,
        size=size,
        entry_price=entry_price,
        current_price=current_price,
        pnl=pnl,
        pnl_percent=pnl_percent,
        spread=spread_of(market),
        volume24h=market.volume,
        liquidity=market.liquidity,
        time_left=calculate_time_left(market.end_date, now),
        category=market.category or DEFAULT_CATEGORY,
        is_winner=pnl > 0,
    )


def index_markets(markets: Iterable[Market]) -> Dict[str, Market]:
    """Map market id to market; the first occurrence of an id wins."""
    index: Dict[str, Market] = {}
    for m in markets:
        index.setdefault(m.id, m)
    return index


def analyze_positions(positions: Iterable[Position], markets: Iterable[Market],
                      now: Optional[datetime] = None) -> List[AnalyzedPosition]:
    """Analyze every position whose market resolves; drop the rest silently."""
    index = index_markets(markets)
    analyzed = []
    for pos in positions:
        market = index.get(pos.market_id)
        if market is None:
            continue
        analyzed.append(analyze_position(pos, market, now))
    return analyzed


def match_reason(analysis: AnalyzedPosition) -> str:
    return (f'Spread {analysis.spread:.1f}%, '
            f'Volume ${analysis.volume24h / 1000:.0f}k, '
            f'Category: {analysis.category}, '
            f'Time {analysis.time_left}')


def is_pattern(analysis: AnalyzedPosition, policy: PatternPolicy) -> bool:
    if not policy.accepts(analysis.spread, analysis.volume24h, analysis.category):
        return False
    return bool(analysis.time_left) and analysis.time_left != EXPIRED


def detect_patterns(positions: Iterable[Position], markets: Iterable[Market],
                    policy: PatternPolicy,
                    now: Optional[datetime] = None) -> List[Pattern]:
    """Positions that fit the policy thresholds and have time left to run."""
    patterns = []
    for analysis in analyze_positions(positions, markets, now):
        if not is_pattern(analysis, policy):
            continue
        fields = vars(analysis).copy()
        patterns.append(Pattern(**fields, match_reason=match_reason(analysis)))
    return patterns


def summarize_markets(markets: Iterable[Market],
                      policy: PatternPolicy) -> List[dict]:
    """Flat market summaries accepted by the policy, highest volume first."""
    rows = []
    for m in markets:
        spread = spread_of(m)
        if not policy.accepts(spread, m.volume, m.category):
            continue
        rows.append({
            'id': m.id,
            'question': m.question,
            'yesPrice': m.yes_price,
            'noPrice': m.no_price,
            'volume': m.volume,
            'liquidity': m.liquidity,
            'spread': spread,
            'category': m.category,
        })
    rows.sort(key=lambda r: r['volume'], reverse=True)
    return rows[:policy.recent_limit]
