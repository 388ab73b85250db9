"""
Tests for the command line entry point.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml

from pnp_inventory_watch import main as main_module
from pnp_inventory_watch.models.cycle import CycleOutcome, CycleResult
from pnp_inventory_watch.utils.error_handling import ErrorTracker


class StopWatching(Exception):
    pass


@pytest.fixture
def config_file(tmp_path):
    data = {
        "search": {"make": "147", "model": "2683", "zip": "T5S1R2"},
        "telegram": {"bot_token": "token", "chat_id": "123"},
        "storage": {"record_file": str(tmp_path / "record.json")},
        "system": {"log_dir": str(tmp_path / "logs"), "polling_interval": 120},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(data), encoding="utf-8")
    return str(path)


@pytest.fixture
def orchestrator():
    instance = AsyncMock()
    instance.error_tracker = ErrorTracker()
    instance.run_once.return_value = CycleResult(outcome=CycleOutcome.NO_NEW_ITEMS)
    with patch.object(
        main_module.CheckOrchestrator, "from_config", return_value=instance
    ), patch.object(main_module, "setup_logging"):
        yield instance


class TestParseArgs:
    """Test command line parsing."""

    def test_defaults(self):
        args = main_module.parse_args([])

        assert args.config_path is None
        assert args.watch is False
        assert args.interval is None

    def test_watch_with_interval(self):
        args = main_module.parse_args(["config.yaml", "--watch", "--interval", "600"])

        assert args.config_path == "config.yaml"
        assert args.watch is True
        assert args.interval == 600

    @pytest.mark.parametrize("value", ["-5", "0", "59", "soon"])
    def test_rejects_short_interval(self, value):
        with pytest.raises(SystemExit):
            main_module.parse_args(["--watch", "--interval", value])

    def test_minimum_interval(self):
        assert main_module.parse_args(["--interval", "60"]).interval == 60

    def test_check_telegram_flag(self):
        assert main_module.parse_args(["--check-telegram"]).check_telegram is True


class TestAsyncMain:
    """Test the async entry point."""

    @pytest.mark.asyncio
    async def test_runs_one_cycle(self, config_file, orchestrator):
        """By default exactly one cycle runs."""
        exit_code = await main_module.async_main(config_file)

        assert exit_code == 0
        orchestrator.run_once.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_config_error_exits_nonzero(self, tmp_path, orchestrator):
        """A bad configuration ends the process before any cycle."""
        exit_code = await main_module.async_main(str(tmp_path / "missing.yaml"))

        assert exit_code == 1
        orchestrator.run_once.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_watch_uses_configured_interval(self, config_file, orchestrator):
        """--watch falls back to system.polling_interval."""
        with patch.object(
            main_module, "run_periodically", new_callable=AsyncMock
        ) as run_periodically:
            await main_module.async_main(config_file, watch=True)

        run_periodically.assert_awaited_once_with(orchestrator, 120)

    @pytest.mark.asyncio
    async def test_run_periodically_sleeps_between_cycles(self, orchestrator):
        """Cycles repeat with the interval in between."""
        sleep = AsyncMock(side_effect=[None, StopWatching])

        with patch.object(main_module.asyncio, "sleep", sleep):
            with pytest.raises(StopWatching):
                await main_module.run_periodically(orchestrator, 300)

        assert orchestrator.run_once.await_count == 2
        sleep.assert_awaited_with(300)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("connected,expected", [(True, 0), (False, 1)])
    async def test_check_telegram(self, config_file, orchestrator, connected, expected):
        """--check-telegram verifies the bot and runs no cycle."""
        orchestrator.notifier = MagicMock()
        orchestrator.notifier.test_connection.return_value = connected

        exit_code = await main_module.async_main(config_file, check_telegram=True)

        assert exit_code == expected
        orchestrator.run_once.assert_not_awaited()
