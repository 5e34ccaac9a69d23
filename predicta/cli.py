"""CLI entry points."""

from dataclasses import replace
from typing import List, Optional, Sequence, Tuple
import argparse
import asyncio
import json
import logging
import uuid

from predicta.aggregator import STATUS_ERROR, AggregateResult, build_aggregator
from predicta.config import Config
from predicta.constants import competition_code
from predicta.models import PredictionModel
from predicta.ops.logging import configure_logging
from predicta.reporting import format_table, prediction_rows, write_predictions_csv
from predicta.sample_data import sample_matches
from predicta.types import Match

logger = logging.getLogger(__name__)

SAMPLE_NOTICE = "Live data unavailable; showing sample data."


def _load_config(
    config_path: Optional[str],
    days: Optional[int] = None,
    competitions: Optional[List[str]] = None,
) -> Config:
    config = Config.load(config_path=config_path)
    if days:
        config = replace(config, days_ahead=max(1, days))
    if competitions:
        codes = [competition_code(item) for item in competitions]
        config = replace(config, competitions=[code for code in codes if code])
    return config


async def _aggregate(config: Config) -> AggregateResult:
    aggregator = build_aggregator(config)
    try:
        return await aggregator.fetch_all_upcoming()
    finally:
        await aggregator.close()


def _collect_matches(config: Config) -> Tuple[List[Match], List[str], bool]:
    """Live matches, collected errors, and whether the sample set was used."""
    if not config.api_key:
        logger.warning("FOOTBALL_DATA_API_KEY is not set.")
        return sample_matches(), ["FOOTBALL_DATA_API_KEY is not set"], True

    result = asyncio.run(_aggregate(config))
    for error in result.errors:
        logger.warning("Fetch error: %s", error)
    if result.status == STATUS_ERROR:
        return sample_matches(), result.errors, True
    return result.matches, result.errors, False


def run_fetch(
    config_path: Optional[str] = None,
    days: Optional[int] = None,
    competitions: Optional[List[str]] = None,
) -> int:
    config = _load_config(config_path, days, competitions)
    configure_logging(run_id=uuid.uuid4().hex[:8], level=config.log_level)

    matches, errors, fallback = _collect_matches(config)
    if fallback:
        print(SAMPLE_NOTICE)
    for match in matches:
        flags = " (estimated stats)" if match.home_team.estimated or match.away_team.estimated else ""
        print(f"{match.kickoff:%Y-%m-%d %H:%M} [{match.competition_code}] {match.title}{flags}")
    print(f"{len(matches)} matches, {len(errors)} errors")
    for error in errors:
        print(f"  error: {error}")
    return 1 if fallback else 0


def run_predict(
    config_path: Optional[str] = None,
    days: Optional[int] = None,
    competitions: Optional[List[str]] = None,
    output_path: Optional[str] = None,
) -> int:
    config = _load_config(config_path, days, competitions)
    configure_logging(run_id=uuid.uuid4().hex[:8], level=config.log_level)

    matches, errors, fallback = _collect_matches(config)
    if fallback:
        print(SAMPLE_NOTICE)

    predictions = PredictionModel().predict(matches)
    rows = prediction_rows(matches, predictions)
    print(format_table(rows))

    if output_path:
        path = write_predictions_csv(rows, output_path)
        logger.info("Wrote %d predictions to %s", len(rows), path)
    if errors and not fallback:
        print(f"{len(errors)} competitions or fixtures failed; results are partial.")
    return 1 if fallback else 0


def run_cache_stats(config_path: Optional[str] = None) -> int:
    config = _load_config(config_path)
    configure_logging(level=config.log_level)
    aggregator = build_aggregator(config)
    stats = aggregator.cache_stats()
    # Request metrics live in memory and are empty in a fresh process
    stats.pop("metrics", None)
    print(json.dumps(stats, indent=2, sort_keys=True))
    return 0


def run_clear_cache(config_path: Optional[str] = None) -> int:
    config = _load_config(config_path)
    configure_logging(level=config.log_level)
    aggregator = build_aggregator(config)
    aggregator.clear_caches()
    print("Caches cleared.")
    return 0


def _add_fetch_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", dest="config_path", help="Path to config file (.env or .json)")
    parser.add_argument("--days", type=int, help="Days ahead to look for fixtures")
    parser.add_argument(
        "--competition",
        dest="competitions",
        action="append",
        help="Competition code or name (repeatable)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Football fixtures and match predictions")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch = subparsers.add_parser("fetch", help="Fetch upcoming matches")
    _add_fetch_options(fetch)

    predict = subparsers.add_parser("predict", help="Fetch upcoming matches and predict them")
    _add_fetch_options(predict)
    predict.add_argument("--output", dest="output_path", help="Write predictions to this CSV file")

    stats = subparsers.add_parser("cache-stats", help="Show cache sizes and queue settings")
    stats.add_argument("--config", dest="config_path", help="Path to config file")

    clear = subparsers.add_parser("clear-cache", help="Empty the fixture and team caches")
    clear.add_argument("--config", dest="config_path", help="Path to config file")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "fetch":
        return run_fetch(
            config_path=args.config_path,
            days=args.days,
            competitions=args.competitions,
        )
    if args.command == "predict":
        return run_predict(
            config_path=args.config_path,
            days=args.days,
            competitions=args.competitions,
            output_path=args.output_path,
        )
    if args.command == "cache-stats":
        return run_cache_stats(config_path=args.config_path)
    if args.command == "clear-cache":
        return run_clear_cache(config_path=args.config_path)

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
