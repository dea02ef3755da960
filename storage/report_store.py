"""JSON report persistence: the hand-off between the fetch and stamp stages."""

import json
import os
from typing import Any, Dict

import config


def write_report(report: Dict[str, Any], path: str = config.REPORT_PATH) -> str:
    """Pretty-print the report to ``path``, overwriting any previous run.

    Non-finite numbers are rejected so the file is always valid JSON.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    text = json.dumps(report, indent=2, ensure_ascii=False, allow_nan=False)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def load_report(path: str = config.REPORT_PATH) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
