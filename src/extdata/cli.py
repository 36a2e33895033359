"""
Command line entry point.

    extdata [--config-dir DIR] [--db-host H] [--db-port P] [--db-user U]
            [--db-pass PW] [--db-name N] [--quiet] [--json-logs] [--drop-tables]

Exit codes: 0 after a clean shutdown or a table drop, 1 when the database is
unreachable, a table drop or bootstrap fails, or the collection loop stops on an
error.
"""

import argparse
import asyncio
import signal
import sys
from typing import Any

import asyncpg
from pydantic import ValidationError

from extdata.config.state import ConfigState, get_config
from extdata.infrastructure.database.ports import DatabaseAdapter
from extdata.infrastructure.observability import get_pipeline_logger, setup_logging
from extdata.ingestion.connectors import AiohttpClient
from extdata.ingestion.exceptions import ConnectivityError, ExtDataError
from extdata.ingestion.service import CollectorService
from extdata.orchestration import LoopOutcome

log = get_pipeline_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extdata",
        description="Collect DCR/BTC exchange candles and mining-pool statistics into PostgreSQL",
    )
    parser.add_argument("--config-dir", default=None, help="Directory holding extdata.yaml")
    parser.add_argument("--db-host", dest="db_host", help="PostgreSQL host")
    parser.add_argument("--db-port", dest="db_port", type=int, help="PostgreSQL port")
    parser.add_argument("--db-user", dest="db_user", help="PostgreSQL user")
    parser.add_argument("--db-pass", dest="db_pass", help="PostgreSQL password")
    parser.add_argument("--db-name", dest="db_name", help="PostgreSQL database")
    parser.add_argument(
        "--quiet", action="store_true", default=None, help="Only log errors"
    )
    parser.add_argument(
        "--json-logs", action="store_true", default=None, help="Emit JSON log lines"
    )
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        default=None,
        help="Drop both tables and exit without collecting",
    )
    return parser


def cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Nested config overrides for the flags that were given."""
    overrides: dict[str, Any] = {}
    database = {
        key: value
        for key, value in (
            ("host", args.db_host),
            ("port", args.db_port),
            ("user", args.db_user),
            ("password", args.db_pass),
            ("name", args.db_name),
        )
        if value is not None
    }
    if database:
        overrides["database"] = database

    logging_overrides = {}
    if args.quiet is not None:
        logging_overrides["quiet"] = args.quiet
    if args.json_logs is not None:
        logging_overrides["json_logs"] = args.json_logs
    if logging_overrides:
        overrides["logging"] = logging_overrides

    if args.drop_tables is not None:
        overrides["drop_tables"] = args.drop_tables
    return overrides


def install_signal_handlers(cancel_event: asyncio.Event) -> None:
    """Route SIGINT/SIGTERM to the shared cancellation event."""
    loop = asyncio.get_running_loop()

    def _handle(signame: str) -> None:
        log.info("shutdown_requested", signal=signame)
        cancel_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _handle, sig.name)
        except NotImplementedError:
            # not supported by Windows event loops
            pass


async def run(config: ConfigState) -> int:
    """Connect, then drop tables or bootstrap and poll. Returns the exit code."""
    db = DatabaseAdapter.from_config(config.database)
    try:
        await db.connect()
        await db.ping()
    except ConnectivityError as e:
        log.error("database_unreachable", error=str(e))
        await db.disconnect()
        return 1

    client = AiohttpClient(config.http_config())
    service = CollectorService(config, db, client)
    try:
        if config.drop_tables:
            try:
                await service.drop_tables()
            except (ExtDataError, asyncpg.PostgresError):
                log.exception("drop_tables_failed")
                return 1
            log.info("tables_dropped")
            return 0

        try:
            await service.bootstrap()
        except (ExtDataError, ValueError, asyncpg.PostgresError):
            log.exception("bootstrap_failed")
            return 1

        install_signal_handlers(service.cancel_event)
        outcome = await service.run_loop()
        return 0 if outcome is LoopOutcome.CANCELLED else 1
    finally:
        await client.close()
        await db.disconnect()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        config = get_config(args.config_dir, cli_overrides(args))
    except (ValidationError, ValueError) as e:
        print(f"Unable to load config: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(
        level=config.logging.effective_level,
        json_logs=config.logging.json_logs,
    )
    sys.exit(asyncio.run(run(config)))


if __name__ == "__main__":
    main()
