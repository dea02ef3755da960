"""Stamp report values into the static HTML dashboard.

Plain, ordered, single-occurrence text replacement. No escaping is done,
and the data JSON goes in last.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import config
from storage.report_store import load_report

TOTAL_POSITIONS = '%TOTAL_POSITIONS%'
PATTERNS_FOUND = '%PATTERNS_FOUND%'
GENERATED_AT = '%GENERATED_AT%'
DATA_JSON = '%DATA_JSON%'
PLACEHOLDERS = (TOTAL_POSITIONS, PATTERNS_FOUND, GENERATED_AT, DATA_JSON)


class TemplateError(Exception):
    """Report or template could not be read."""


def format_local_time(now: datetime) -> str:
    """pt-BR style local timestamp, e.g. '18/10/2026, 14:03:05'."""
    return now.strftime('%d/%m/%Y, %H:%M:%S')


def _replacements(report: Dict[str, Any], now: datetime) -> List[Tuple[str, str]]:
    summary = report.get('summary') or {}
    return [
        (TOTAL_POSITIONS, str(summary.get('totalPositions', 0))),
        (PATTERNS_FOUND, str(summary.get('patternsFound', 0))),
        (GENERATED_AT, format_local_time(now)),
        (DATA_JSON, json.dumps(report, ensure_ascii=False, separators=(',', ':'))),
    ]


def stamp_html(html: str, report: Dict[str, Any],
               now: Optional[datetime] = None) -> Tuple[str, List[str]]:
    """Replace each placeholder once, in order.

    Returns the new HTML and the placeholders that were not found.
    """
    now = now or datetime.now()
    missing = []
    for token, value in _replacements(report, now):
        if token not in html:
            missing.append(token)
            continue
        html = html.replace(token, value, 1)
    return html, missing


def stamp_file(report_path: str = config.REPORT_PATH,
               html_path: str = config.HTML_PATH,
               now: Optional[datetime] = None) -> Dict[str, Any]:
    """Read the report and template, stamp, and rewrite the template in place."""
    try:
        report = load_report(report_path)
    except (OSError, ValueError) as e:
        raise TemplateError(f"cannot read report {report_path}: {e}") from e
    try:
        with open(html_path, 'r', encoding='utf-8') as f:
            html = f.read()
    except OSError as e:
        raise TemplateError(f"cannot read template {html_path}: {e}") from e

    print(f"Stamping dashboard with {report.get('summary', {}).get('totalPositions', 0)} positions")
    html, missing = stamp_html(html, report, now)
    for token in missing:
        print(f"  Warning: placeholder {token} not found in {html_path}")

    with open(html_path, 'w', encoding='utf-8') as f:
        f.write(html)
    print(f"  Wrote {html_path}")
    return report
