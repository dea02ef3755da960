"""Assemble the JSON dashboard report from a fetched snapshot.

The report is the only interface between this pipeline and the HTML stamp
step, so its key names are fixed: generatedAt, summary, stats, patterns,
recentMarkets.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from analyzers.policy import PatternPolicy
from analyzers.positions import analyze_positions, detect_patterns, summarize_markets
from analyzers.stats import summarize
from collectors.snapshot import Snapshot


def iso_timestamp(now: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a 'Z' suffix."""
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_report(
    snapshot: Snapshot,
    policy: PatternPolicy,
    mode: str = 'live',
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Run the analytics over one snapshot and lay out the report dict.

    ``summary.totalPositions`` counts positions that resolved to a market,
    so it always equals ``len(stats.positions)`` when stats is present.
    """
    now = now or datetime.now(timezone.utc)
    markets = snapshot.markets
    positions = snapshot.positions.items

    analyzed = analyze_positions(positions, markets, now)
    stats = summarize(analyzed)
    patterns = detect_patterns(positions, markets, policy, now)
    recent = summarize_markets(markets, policy)

    warnings: List[str] = snapshot.warnings
    dropped = len(positions) - len(analyzed)
    if dropped:
        warnings.append(f'{dropped} position(s) reference unknown markets')

    return {
        'generatedAt': iso_timestamp(now),
        'summary': {
            'totalPositions': len(analyzed),
            'totalMarkets': len(markets),
            'patternsFound': len(patterns),
            'fetchedPositions': len(positions),
            'totalTrades': len(snapshot.trades),
            'policy': policy.name,
            'mode': mode,
            'warnings': warnings,
        },
        'stats': stats.to_dict() if stats else None,
        'patterns': [p.to_dict() for p in patterns],
        'recentMarkets': recent,
    }
