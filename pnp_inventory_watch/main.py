"""
Main entry point for the Pick-n-Pull inventory watch.

By default one check cycle runs and the process exits, leaving scheduling
to cron or a similar scheduler. With --watch, cycles repeat in-process.
"""

import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

from .orchestrator import CheckOrchestrator
from .services.config_manager import ConfigurationManager
from .utils.logging import get_logger, setup_logging

DEFAULT_WATCH_INTERVAL = 3600
MIN_WATCH_INTERVAL = 60


def watch_interval(value: str) -> int:
    """argparse type for --interval, with the same floor as system.polling_interval."""
    try:
        seconds = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if seconds < MIN_WATCH_INTERVAL:
        raise argparse.ArgumentTypeError(
            f"must be at least {MIN_WATCH_INTERVAL} seconds, got {seconds}"
        )
    return seconds


async def run_periodically(orchestrator: CheckOrchestrator, interval: int) -> None:
    """Run check cycles forever, sleeping ``interval`` seconds between them."""
    logger = get_logger("main")
    while True:
        result = await orchestrator.run_once()
        error_stats = orchestrator.error_tracker.get_error_stats()
        logger.info(
            f"Next inventory check in {interval} seconds",
            extra={
                "outcome": result.outcome.value,
                "errors_last_day": error_stats["errors_last_day"],
            },
        )
        await asyncio.sleep(interval)


async def async_main(
    config_path: Optional[str] = None,
    watch: bool = False,
    interval: Optional[int] = None,
    check_telegram: bool = False,
) -> int:
    """Async main application entry point."""
    try:
        config = ConfigurationManager(config_path).load_config()
    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(log_dir=config.log_dir, log_level=config.log_level)
    logger = get_logger("main")
    logger.info(
        "Starting Pick-n-Pull inventory watch",
        extra={"config_path": config_path, "search_url": config.search.build_url()},
    )

    orchestrator = CheckOrchestrator.from_config(config)

    if check_telegram:
        if orchestrator.notifier.test_connection():
            logger.info("Telegram bot token verified")
            return 0
        logger.error("Telegram connection test failed")
        return 1

    if watch:
        await run_periodically(
            orchestrator, interval or config.polling_interval or DEFAULT_WATCH_INTERVAL
        )
    else:
        await orchestrator.run_once()

    return 0


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Notify via Telegram when new vehicles appear in a Pick-n-Pull search"
    )
    parser.add_argument("config_path", nargs="?", help="Path to configuration file")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and repeat the check on an interval",
    )
    parser.add_argument(
        "--interval",
        type=watch_interval,
        help="Seconds between checks with --watch (overrides system.polling_interval)",
    )
    parser.add_argument(
        "--check-telegram",
        action="store_true",
        help="Verify the Telegram bot token and exit without checking inventory",
    )
    return parser.parse_args(argv)


def main():
    """Main application entry point."""
    args = parse_args()
    load_dotenv()

    try:
        exit_code = asyncio.run(
            async_main(
                args.config_path,
                watch=args.watch,
                interval=args.interval,
                check_telegram=args.check_telegram,
            )
        )
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        exit_code = 0

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
