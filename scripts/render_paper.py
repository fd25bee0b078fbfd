"""
Render a paper payload to PDF for manual review.

Reads a JSON payload ({"paper": ..., "questions": [...], "settings": ...}),
renders it and writes {slug}.pdf into the output directory.

Usage:
    python scripts/render_paper.py payload.json --out workspace/papers
    python scripts/render_paper.py payload.json --watermark --site-name "TKS Prepify"
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from paper_press.core.serialization import ValidationError, load_paper_file
from paper_press.render import render_paper


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a paper payload to PDF")
    parser.add_argument("payload", type=Path, help="Path to payload JSON")
    parser.add_argument("--out", type=Path, default=Path("workspace") / "papers", help="Output directory")
    parser.add_argument("--watermark", action="store_true", help="Force the watermark on")
    parser.add_argument("--site-name", type=str, help="Override the site name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        paper, questions, settings = load_paper_file(args.payload)
    except ValidationError as e:
        print(f"[ERROR] {e}")
        for err in e.errors:
            print(f"        - {err}")
        return 1
    except json.JSONDecodeError as e:
        print(f"[ERROR] Payload is not valid JSON: {e}")
        return 1
    except OSError as e:
        print(f"[ERROR] Cannot read payload: {e}")
        return 1

    if args.watermark:
        settings = replace(settings, pdf_watermark_enabled=True)
    if args.site_name:
        settings = replace(settings, site_name=args.site_name)

    result = render_paper(paper, questions, settings)
    path = result.save(args.out)

    print(f"[OK] {len(result.blocks)} questions, {result.page_count} pages -> {path}")
    for warning in result.warnings:
        print(f"[WARNING] {warning}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
