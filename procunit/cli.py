"""CLI entry point for running database-resident test suites."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from procunit.catalog import PostgresCatalog
from procunit.config import RunnerConfig
from procunit.connection import connect
from procunit.errors import IsolationError
from procunit.executor import SuiteExecutor
from procunit.installer import install_assertions
from procunit.models.result import TestResult
from procunit.sessions import terminate_sessions

STATUS_SYMBOLS = {
    "success": "✓",
    "failure": "✗",
    "error": "!",
}

EXIT_ABORTED = 2


def log_results_summary(log: logging.Logger, results: Sequence[TestResult]) -> None:
    """Log a formatted summary of test results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in results:
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        log.info(
            "%s %s: %s (%.3fs)",
            symbol,
            result.name,
            result.status,
            result.duration,
        )
        if result.status != "success":
            log.info("  Message: %s", result.message)


def format_output(results: Sequence[TestResult]) -> dict[str, Any]:
    """Format test results for JSON output."""
    all_results = [
        {
            "name": result.name,
            "status": result.status,
            "duration": result.duration,
            "message": result.message,
        }
        for result in results
    ]

    return {
        "total": len(all_results),
        "passed": sum(1 for r in all_results if r["status"] == "success"),
        "failed": sum(1 for r in all_results if r["status"] == "failure"),
        "errors": sum(1 for r in all_results if r["status"] == "error"),
        "results": all_results,
    }


async def run(config_json: str, suite: str | None = None) -> int:
    """Run a test suite and return exit code."""
    log = logging.getLogger("procunit")
    config = RunnerConfig.model_validate_json(config_json)

    results: list[TestResult] = []
    async with connect(config) as connection:
        executor = SuiteExecutor(
            catalog=PostgresCatalog(connection=connection),
            connection=connection,
            naming=config.naming,
        )
        log.info("Running suite: %s", suite or "all")
        try:
            async for result in executor.run_suite(suite):
                results.append(result)
        except IsolationError as exc:
            log.error("Test run aborted by a setup or teardown hook: %s", exc)
            exit_code = EXIT_ABORTED
        else:
            has_failures = any(r.status in {"failure", "error"} for r in results)
            exit_code = 1 if has_failures else 0

    log_results_summary(log, results)
    print(json.dumps(format_output(results), indent=2))
    return exit_code


async def install(config_json: str) -> int:
    """Install the assertion library and return exit code."""
    config = RunnerConfig.model_validate_json(config_json)
    async with connect(config) as connection:
        await install_assertions(connection)
    return 0


async def terminate(config_json: str, database: str) -> int:
    """Terminate active sessions on a database and return exit code."""
    config = RunnerConfig.model_validate_json(config_json)
    async with connect(config) as connection:
        sessions = await terminate_sessions(connection, database)
    print(json.dumps([session.model_dump(mode="json") for session in sessions]))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Run test suites stored as routines in a PostgreSQL database"
    )
    parser.add_argument(
        "--config",
        required=True,
        help='JSON runner configuration (e.g., \'{"dsn": "postgresql://..."}\')',
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run test units")
    run_parser.add_argument(
        "--suite",
        default=None,
        help="Run only units whose name starts with test_case_<suite>",
    )

    subparsers.add_parser("install", help="Install the assertion library")

    terminate_parser = subparsers.add_parser(
        "terminate", help="Terminate other active sessions on a database"
    )
    terminate_parser.add_argument(
        "--database",
        required=True,
        help="Database whose active sessions are terminated",
    )
    return parser


def main() -> None:
    """CLI entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "install":
        coro = install(args.config)
    elif args.command == "terminate":
        coro = terminate(args.config, args.database)
    else:
        coro = run(args.config, args.suite)

    sys.exit(asyncio.run(coro))


if __name__ == "__main__":  # pragma: no cover
    main()
