"""Portfolio statistics over analyzed positions: win rate, gain/loss, breakdowns."""

from datetime import datetime
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from analyzers.positions import analyze_positions
from storage.models import AnalyzedPosition, Market, PortfolioStats, Position

TOP_MARKETS = 10


def _mean_or_zero(series: pd.Series) -> float:
    value = series.mean()
    return float(value) if pd.notna(value) else 0.0


def _category_breakdown(df: pd.DataFrame) -> List[dict]:
    by_cat = (df.groupby('category', sort=False)
                .agg(positions=('pnl', 'size'), pnl=('pnl', 'sum'))
                .reset_index()
                .sort_values('pnl', ascending=False, kind='stable'))
    return [{'category': r.category, 'count': int(r.positions), 'pnl': float(r.pnl)}
            for r in by_cat.itertuples(index=False)]


def _top_markets(df: pd.DataFrame, limit: int = TOP_MARKETS) -> List[dict]:
    """Sum P&L per market; the first position seen supplies the question."""
    top = (df.groupby('market_id', sort=False)
             .agg(question=('question', 'first'),
                  total_pnl=('pnl', 'sum'),
                  trades=('pnl', 'size'))
             .reset_index()
             .sort_values('total_pnl', ascending=False, kind='stable')
             .head(limit))
    return [{'marketId': r.market_id, 'question': r.question,
             'totalPnL': float(r.total_pnl), 'trades': int(r.trades)}
            for r in top.itertuples(index=False)]


def summarize(analyzed: List[AnalyzedPosition]) -> Optional[PortfolioStats]:
    """Aggregate already-analyzed positions. None when the list is empty."""
    if not analyzed:
        return None

    df = pd.DataFrame([vars(p) for p in analyzed])
    df['pnl'] = df['pnl'].astype(float)
    df['pnl_percent'] = pd.to_numeric(df['pnl_percent'], errors='coerce')

    winners = df[df['is_winner']]
    losers = df[~df['is_winner']]

    # Positions without a defined pnl% are skipped by mean()
    avg_gain = _mean_or_zero(winners['pnl_percent'])
    avg_loss = _mean_or_zero(losers['pnl_percent'].abs())
    profit_factor = avg_gain / avg_loss if avg_loss > 0 else 0.0

    total = len(df)
    wins = int(winners.shape[0])

    return PortfolioStats(
        total_positions=total,
        total_pnl=float(np.sum(df['pnl'])),
        win_rate=wins / total * 100,
        wins=wins,
        losses=total - wins,
        avg_gain=avg_gain,
        avg_loss=avg_loss,
        profit_factor=profit_factor,
        by_category=_category_breakdown(df),
        top_markets=_top_markets(df),
        positions=list(analyzed),
    )


def calculate_stats(positions: Iterable[Position], markets: Iterable[Market],
                    now: Optional[datetime] = None) -> Optional[PortfolioStats]:
    """Resolve and analyze every position, then aggregate.

    Returns None when no position resolves to a known market.
    """
    return summarize(analyze_positions(positions, markets, now))
