"""Fetch markets, positions and trades concurrently for one run."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List

import config
from collectors.api_client import ClobClient
from collectors.market_collector import fetch_markets
from collectors.position_collector import fetch_positions
from collectors.trade_collector import fetch_trades
from storage.models import FetchResult, Market


@dataclass
class Snapshot:
    markets: List[Market]
    positions: FetchResult
    trades: FetchResult

    @property
    def warnings(self) -> List[str]:
        return [r.reason for r in (self.positions, self.trades)
                if r.degraded and r.reason]


def fetch_all(
    client: ClobClient,
    wallet: str,
    market_limit: int = config.MARKET_LIMIT,
    trade_limit: int = config.TRADE_LIMIT,
) -> Snapshot:
    """Run the three fetchers in parallel and wait for all of them.

    A market fetch failure is re-raised here; positions and trades degrade
    to empty results on their own. Each fetch runs on its own forked client,
    since a requests.Session is not shared across threads.
    """
    workers = [client.fork() for _ in range(3)]
    try:
        with ThreadPoolExecutor(max_workers=3) as pool:
            markets_f = pool.submit(fetch_markets, workers[0], market_limit)
            positions_f = pool.submit(fetch_positions, workers[1], wallet)
            trades_f = pool.submit(fetch_trades, workers[2], wallet, trade_limit)

            return Snapshot(
                markets=markets_f.result(),
                positions=positions_f.result(),
                trades=trades_f.result(),
            )
    finally:
        for worker in workers:
            worker.close()
