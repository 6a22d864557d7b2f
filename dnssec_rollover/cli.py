"""Command-line entry point for the scheduled DNSSEC rollover job.

Intended to be run once a day from cron or a systemd timer:

    dnssec-rollover [--dry-run] [--verbose]

Exit status is 0 when the run finished, even if individual zones or keys
failed (those are logged and counted). It is 1 when the job could not be
set up at all (missing API or database configuration), and also when the
list of candidate zones cannot be read from the database: without that
list no zone can be processed, so the run is reported as failed instead
of printing an empty summary.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence

from structlog import get_logger

from dnssec_rollover.bootstrap.database import close_database_engine
from dnssec_rollover.bootstrap.logging import configure_logging
from dnssec_rollover.bootstrap.rollover import build_rollover_run_service
from dnssec_rollover.config import load_dotenv_file, policy_from_environment
from dnssec_rollover.domain.errors import ConfigurationError
from dnssec_rollover.domain.exceptions import RolloverError
from dnssec_rollover.domain.models.run_summary import RunSummary

DRY_RUN_NOTICE = "Dry run mode - no changes applied."

logger = get_logger()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dnssec-rollover",
        description="Rotate DNSSEC signing keys of PowerDNS zones on a fixed schedule.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without calling the API or writing markers "
        "(implies --verbose)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-zone decisions at debug level",
    )
    return parser.parse_args(argv)


async def run_rollover(dry_run: bool) -> RunSummary:
    """Build the services and process every zone once.

    Raises:
        ConfigurationError: If setup fails.
        StorageError: If the candidate zones cannot be listed.
    """
    policy = policy_from_environment()
    logger.info(
        "rollover_policy_loaded",
        rollover_interval_days=policy.rollover_interval_days,
        hold_period_days=policy.hold_period_days,
        deletion_grace_days=policy.deletion_grace_days,
        dry_run=dry_run,
    )
    service = build_rollover_run_service(policy, dry_run=dry_run)
    try:
        return await service.run()
    finally:
        await close_database_engine()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    load_dotenv_file()
    verbose = args.verbose or args.dry_run
    configure_logging(verbose=verbose)

    try:
        summary = asyncio.run(run_rollover(args.dry_run))
    except ConfigurationError as e:
        logger.error("rollover_setup_failed", error=str(e))
        return 1
    except RolloverError as e:
        logger.error("rollover_run_aborted", error=str(e))
        return 1

    print(summary.render())
    if args.dry_run:
        print(DRY_RUN_NOTICE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
