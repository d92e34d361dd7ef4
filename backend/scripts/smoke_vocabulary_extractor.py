"""Run a real Gemini vocabulary extraction against a local photo.

Usage (from repo root):
    python backend/scripts/smoke_vocabulary_extractor.py path/to/photo.jpg

Usage (from backend/):
    python scripts/smoke_vocabulary_extractor.py path/to/photo.jpg
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from lerndeutsch.config import get_settings
from lerndeutsch.extraction.vocabulary_extractor import extract_vocabulary_from_image
from lerndeutsch.logging_setup import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("image", help="Path or file:// URI of the photo to extract from.")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)
    outcome = asyncio.run(extract_vocabulary_from_image(args.image))
    print(json.dumps(asdict(outcome), indent=2, ensure_ascii=False, default=str))
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
