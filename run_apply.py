import argparse
import asyncio
import sys

from naukri_bot.config import BOT_CONFIG_FILE, load_credentials, load_run_config
from naukri_bot.errors import ConfigError
from naukri_bot.orchestrator import BatchOrchestrator
from tools.browser_manager import BrowserManager
from tools.logger import get_logger, setup_logger

logger = get_logger("Runner")

async def run_apply(config, credentials):
    async with BrowserManager(config) as driver:
        orchestrator = BatchOrchestrator(config, driver)
        return await orchestrator.run(credentials)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Search Naukri and apply to matching jobs")
    parser.add_argument("--job-title", default=None, help="Job title to search for")
    parser.add_argument("--count", type=int, default=None, help="Max number of applications to attempt")
    parser.add_argument("--max-retries", type=int, default=None, help="Attempts per browser operation")
    parser.add_argument("--headless", action="store_true", default=None, help="Run without a visible browser window")
    parser.add_argument("--config", default=BOT_CONFIG_FILE, help="Path to JSON settings file")
    return parser.parse_args(argv)

def main(argv=None):
    setup_logger()
    args = parse_args(argv)

    try:
        config = load_run_config(
            args.config,
            job_title=args.job_title,
            applications=args.count,
            max_retries=args.max_retries,
            headless=args.headless,
        )
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    logger.info(f"Starting: '{config.job_title}', up to {config.applications} applications")
    try:
        report = asyncio.run(run_apply(config, load_credentials()))
    except Exception as e:
        logger.error(f"Browser session failed: {e}")
        return 1

    if report.is_fatal:
        logger.error(f"Run aborted during {report.stage}: {report.error}")
        return 1

    summary = report.batch.summary()
    logger.info(
        f"Finished. Listings found: {report.candidates_found} | Attempted: {summary['attempted']} | "
        f"Applied: {summary['applied']} | No apply button: {summary['apply_control_not_found']} | "
        f"Failed: {summary['failed']}"
    )
    return 0

if __name__ == "__main__":
    sys.exit(main())
