"""Threshold policies for "good trade" pattern detection and market filtering."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

PREFERRED_CATEGORIES = frozenset({
    'Crypto', 'Elections', 'Politics', 'Sports',
    'US-current-affairs', 'Coronavirus',
})


@dataclass(frozen=True)
class PatternPolicy:
    name: str
    spread_min: float
    spread_max: float
    volume_floor: float
    allowed_categories: Optional[FrozenSet[str]] = None  # None = any category
    recent_limit: int = 20

    def accepts(self, spread: float, volume: float, category: Optional[str]) -> bool:
        """Inclusive spread band, volume floor and (optional) category allow-list."""
        if not (self.spread_min <= spread <= self.spread_max):
            return False
        if volume < self.volume_floor:
            return False
        if self.allowed_categories is not None and category not in self.allowed_categories:
            return False
        return True


BROAD = PatternPolicy(
    name='broad',
    spread_min=1.0,
    spread_max=3.0,
    volume_floor=50_000,
    allowed_categories=PREFERRED_CATEGORIES,
)

NARROW = PatternPolicy(
    name='narrow',
    spread_min=1.5,
    spread_max=2.0,
    volume_floor=100_000,
    allowed_categories=None,
)

POLICIES: Dict[str, PatternPolicy] = {p.name: p for p in (BROAD, NARROW)}


def get_policy(name: str) -> PatternPolicy:
    try:
        return POLICIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown policy {name!r} (choose from {', '.join(sorted(POLICIES))})"
        ) from None
