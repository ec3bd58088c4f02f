from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import settings
from .crawler import CrawlDriver, CrawlSummary, HttpxFetcher, JsonlRecordSink
from .crawler.exceptions import ConfigurationError
from .crawler.models import CrawlInput, load_crawl_input
from .services import telemetry


def _setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> logging.Logger:
    """Configure logging to stdout and a rotating file."""

    directory = Path(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handlers: List[logging.Handler] = [
        RotatingFileHandler(directory / "scraper.log", maxBytes=5_000_000, backupCount=3),
        logging.StreamHandler(sys.stdout),
    ]
    logging.basicConfig(level=level.upper(), format=fmt, handlers=handlers, force=True)
    # HTTPX logs every request at INFO; keep them quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("job_board_scraper")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-board-scraper",
        description="Scrape Workable job listings into a JSON Lines dataset.",
    )
    parser.add_argument("--input", type=Path, help="JSON input file (keys as in the actor input schema)")
    parser.add_argument("--keyword", help="Search keyword")
    parser.add_argument("--location", help="Location filter")
    parser.add_argument("--posted-within", dest="date_window", help="24h | 7d | 30d | none")
    parser.add_argument("--results-wanted", dest="target_count", type=int, help="Max records to save")
    parser.add_argument("--max-pages", type=int, help="Max listing pages per pass")
    parser.add_argument("--concurrency", type=int, help="Parallel requests per batch")
    parser.add_argument("--proxy-url", help="Outbound HTTP proxy")
    parser.add_argument(
        "--start-url",
        dest="start_urls",
        action="append",
        help="Search, API or job URL (repeatable)",
    )
    parser.add_argument(
        "--broaden-date-window",
        action="store_true",
        default=None,
        help="Widen the posted-within window until enough jobs are found",
    )
    parser.add_argument("--output", type=Path, help="Output JSONL path")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-dir", help="Directory for scraper.log")
    return parser


def _read_input_file(path: Path) -> Dict[str, Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read input file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Input file {path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Input file {path} must contain a JSON object")
    return raw


def resolve_input(args: argparse.Namespace) -> CrawlInput:
    """Merge the optional input file with CLI flags (flags win) and validate."""

    raw: Dict[str, Any] = _read_input_file(args.input) if args.input else {}
    overrides = {
        "keyword": args.keyword,
        "location": args.location,
        "date_window": args.date_window,
        "target_count": args.target_count,
        "max_pages": args.max_pages,
        "concurrency": args.concurrency,
        "proxy_url": args.proxy_url,
        "start_urls": args.start_urls,
        "broaden_date_window": args.broaden_date_window,
    }
    for key, value in overrides.items():
        if value is None:
            continue
        raw = {k: v for k, v in raw.items() if not _is_alias_of(k, key)}
        raw[key] = value
    return load_crawl_input(raw)


def _is_alias_of(raw_key: str, field_name: str) -> bool:
    alias = CrawlInput.model_fields[field_name].validation_alias
    choices = getattr(alias, "choices", None) or ()
    return raw_key == field_name or raw_key in choices


async def run_crawl(crawl_input: CrawlInput, output: Path) -> CrawlSummary:
    with JsonlRecordSink(output) as sink:
        async with HttpxFetcher(proxy_url=crawl_input.proxy_url) as fetcher:
            driver = CrawlDriver.from_input(crawl_input, fetcher, sink)
            return await driver.run()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = _setup_logging(args.log_level, args.log_dir)

    try:
        crawl_input = resolve_input(args)
    except ConfigurationError as exc:
        parser.error(exc.message)

    output = args.output or Path(settings.output_path)
    try:
        summary = asyncio.run(run_crawl(crawl_input, output))
    except ConfigurationError as exc:
        parser.error(exc.message)
    finally:
        telemetry.flush()

    logger.info("Scraper finished. Output: %s", output)
    print(json.dumps(asdict(summary), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
