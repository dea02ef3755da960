"""Stamp data.json values into the index.html dashboard template."""

import argparse
import sys

import config
from reporting.template_stamper import TemplateError, stamp_file


def main(argv=None):
    parser = argparse.ArgumentParser(description="Fill the HTML dashboard from the JSON report")
    parser.add_argument("--data", default=config.REPORT_PATH, help="Report JSON path")
    parser.add_argument("--html", default=config.HTML_PATH, help="HTML template (rewritten in place)")
    args = parser.parse_args(argv)

    try:
        stamp_file(args.data, args.html)
    except (TemplateError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
