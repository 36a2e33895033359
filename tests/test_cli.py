"""
Tests for the command line layer: flag parsing, override mapping and exit
codes of run().
"""

import asyncio
import os
import signal
import sys
from unittest.mock import AsyncMock, patch

import asyncpg
import pytest

from extdata import cli
from extdata.config.state import ConfigState
from extdata.ingestion.exceptions import ConnectivityError
from extdata.orchestration import LoopOutcome


def parse(*argv: str):
    return cli.build_parser().parse_args(list(argv))


class TestOverrides:
    def test_no_flags_no_overrides(self):
        assert cli.cli_overrides(parse()) == {}

    def test_database_flags(self):
        args = parse("--db-host", "pg", "--db-port", "6543", "--db-pass", "pw", "--db-name", "dcr")

        assert cli.cli_overrides(args) == {
            "database": {"host": "pg", "port": 6543, "password": "pw", "name": "dcr"}
        }

    def test_switches(self):
        overrides = cli.cli_overrides(parse("--quiet", "--json-logs", "--drop-tables"))

        assert overrides == {
            "logging": {"quiet": True, "json_logs": True},
            "drop_tables": True,
        }

    def test_main_rejects_invalid_config(self, tmp_path, capsys):
        (tmp_path / "extdata.yaml").write_text("collector:\n  binance_limit: 5000\n")

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--config-dir", str(tmp_path)])

        assert exc_info.value.code == 1
        assert "Unable to load config" in capsys.readouterr().err


@pytest.fixture
def db():
    db = AsyncMock()
    with patch.object(cli.DatabaseAdapter, "from_config", return_value=db):
        yield db


class TestRun:
    @pytest.mark.asyncio
    async def test_unreachable_database_exits_1(self, db):
        db.connect.side_effect = ConnectivityError("refused")

        assert await cli.run(ConfigState()) == 1
        db.disconnect.assert_awaited()

    @pytest.mark.asyncio
    async def test_drop_tables_exits_0_without_collecting(self, db):
        with patch.object(cli.CollectorService, "drop_tables", AsyncMock()) as drop, patch.object(
            cli.CollectorService, "bootstrap", AsyncMock()
        ) as bootstrap:
            code = await cli.run(ConfigState(drop_tables=True))

        assert code == 0
        drop.assert_awaited_once()
        bootstrap.assert_not_awaited()
        db.disconnect.assert_awaited()

    @pytest.mark.asyncio
    async def test_bootstrap_failure_exits_1(self, db):
        with patch.object(
            cli.CollectorService,
            "bootstrap",
            AsyncMock(side_effect=ConnectivityError("HTTP 502", source="binance")),
        ):
            assert await cli.run(ConfigState()) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "outcome, code", [(LoopOutcome.CANCELLED, 0), (LoopOutcome.FAILED, 1)]
    )
    async def test_loop_outcome_maps_to_exit_code(self, db, outcome, code):
        with patch.object(cli.CollectorService, "bootstrap", AsyncMock()), patch.object(
            cli.CollectorService, "run_loop", AsyncMock(return_value=outcome)
        ), patch.object(cli, "install_signal_handlers"):
            assert await cli.run(ConfigState()) == code

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            asyncpg.InsufficientPrivilegeError("permission denied for schema public"),
            asyncpg.NumericValueOutOfRangeError(
                'value "412345678901234" is out of range for type integer'
            ),
        ],
    )
    async def test_postgres_error_during_bootstrap_exits_1(self, db, error):
        with patch.object(cli.CollectorService, "bootstrap", AsyncMock(side_effect=error)):
            assert await cli.run(ConfigState()) == 1

        db.disconnect.assert_awaited()

    @pytest.mark.asyncio
    async def test_postgres_error_during_drop_exits_1(self, db):
        with patch.object(
            cli.CollectorService,
            "drop_tables",
            AsyncMock(side_effect=asyncpg.InsufficientPrivilegeError("must be owner of table")),
        ):
            assert await cli.run(ConfigState(drop_tables=True)) == 1


class TestRunStartup:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            asyncpg.InvalidPasswordError("password authentication failed"),
            asyncpg.InvalidCatalogNameError('database "extdata" does not exist'),
        ],
    )
    async def test_rejected_session_exits_1(self, error):
        with patch(
            "extdata.infrastructure.database.ports.asyncpg.create_pool",
            AsyncMock(side_effect=error),
        ):
            assert await cli.run(ConfigState()) == 1


@pytest.mark.skipif(sys.platform == "win32", reason="loop signal handlers need a Unix event loop")
class TestSignalHandlers:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("signum", [signal.SIGINT, signal.SIGTERM])
    async def test_signal_sets_cancel_event(self, signum):
        event = asyncio.Event()
        loop = asyncio.get_running_loop()
        cli.install_signal_handlers(event)
        try:
            os.kill(os.getpid(), signum)
            await asyncio.wait_for(event.wait(), timeout=5)
        finally:
            loop.remove_signal_handler(signal.SIGINT)
            loop.remove_signal_handler(signal.SIGTERM)

        assert event.is_set()
