"""CLOB wallet dashboard: fetch, analyze, and write data.json."""

import argparse
import sys
import time

import config
from analyzers.policy import PatternPolicy, get_policy
from collectors.api_client import ClobClient
from collectors.demo_data import demo_snapshot
from collectors.snapshot import Snapshot, fetch_all
from config import Credentials, load_credentials, require_credentials
from reporting.report_generator import build_report
from storage.report_store import write_report


def run_live(creds: Credentials, market_limit: int, trade_limit: int,
             timeout: float) -> Snapshot:
    """Fetch markets, positions and trades from the CLOB API."""
    if not creds.wallet:
        print(f"  Warning: {config.ENV_WALLET} not set; collecting market data only")

    client = ClobClient(creds, timeout=timeout)
    try:
        return fetch_all(client, creds.wallet,
                         market_limit=market_limit, trade_limit=trade_limit)
    finally:
        client.close()


def run(creds: Credentials, policy: PatternPolicy, output: str,
        demo: bool = False, strict: bool = False,
        market_limit: int = config.MARKET_LIMIT,
        trade_limit: int = config.TRADE_LIMIT,
        timeout: float = config.REQUEST_TIMEOUT) -> dict:
    """Run one pipeline pass and write the report. Returns the report."""
    if strict and not demo:
        require_credentials(creds)

    if demo or not creds.complete:
        if not demo:
            print("Warning: CLOB credentials not found "
                  f"({', '.join(creds.missing())}); generating demo data")
        mode = 'demo'
        snapshot = demo_snapshot()
    else:
        print("Fetching data from the CLOB API...")
        mode = 'live'
        snapshot = run_live(creds, market_limit, trade_limit, timeout)

    print(f"  Markets: {len(snapshot.markets)}, "
          f"Positions: {len(snapshot.positions)}, "
          f"Trades: {len(snapshot.trades)}")

    report = build_report(snapshot, policy, mode=mode)
    write_report(report, output)

    summary = report['summary']
    print(f"{output} written ({mode}): {summary['totalPositions']} positions, "
          f"{summary['patternsFound']} patterns detected")
    return report


def main(argv=None):
    parser = argparse.ArgumentParser(description="Polymarket CLOB wallet dashboard pipeline")
    parser.add_argument("--output", default=config.REPORT_PATH, help="Report JSON path")
    parser.add_argument("--policy", default=config.DEFAULT_POLICY,
                        help="Pattern threshold policy (broad or narrow)")
    parser.add_argument("--market-limit", type=int, default=config.MARKET_LIMIT)
    parser.add_argument("--trade-limit", type=int, default=config.TRADE_LIMIT)
    parser.add_argument("--timeout", type=float, default=config.REQUEST_TIMEOUT,
                        help="HTTP timeout in seconds (0 = none)")
    parser.add_argument("--demo", action="store_true", help="Use embedded sample data")
    parser.add_argument("--strict", action="store_true",
                        help="Fail instead of falling back to demo data when credentials are missing")
    args = parser.parse_args(argv)

    start = time.time()
    try:
        policy = get_policy(args.policy)
        run(load_credentials(), policy, args.output,
            demo=args.demo, strict=args.strict,
            market_limit=args.market_limit, trade_limit=args.trade_limit,
            timeout=args.timeout)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nCompleted in {time.time() - start:.1f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
