"""End-to-end tests for the fin-tilt command line."""

import json

import pytest

from fin_tilt.commands import CommandStatus, DepositCommand, RebalanceCommand
from fin_tilt.main import main
from tilt_calculator import Money
from tilt_config import build_policy, load_config


@pytest.fixture
def config_path(data_dir):
    return str(data_dir / "config_voo_bnd.yaml")


@pytest.fixture
def portfolio_path(data_dir):
    return str(data_dir / "portfolio_voo_bnd.csv")


@pytest.mark.integration
class TestRebalanceCli:
    """fin-tilt rebalance"""

    def test_text_report(self, capsys, config_path, portfolio_path):
        assert main(["--config", config_path, "rebalance", portfolio_path]) == 0

        out = capsys.readouterr().out
        assert "VOO - 88.89% (+8.89%)" in out
        assert "Needed: -$800.00" in out
        assert "Needed: +$800.00" in out
        assert "Total: $9,000.00" in out
        assert "AAPL" not in out
        assert "\033[" not in out

    def test_deposit_option(self, capsys, config_path, portfolio_path):
        assert main(["--config", config_path, "rebalance", portfolio_path, "--deposit", "1000"]) == 0
        assert "Total: $10,000.00 (includes $1,000.00 deposit)" in capsys.readouterr().out

    def test_legacy_deposit_flag(self, capsys, config_path, portfolio_path):
        assert main(["--config", config_path, "rebalance", portfolio_path, "--toDeposit", "1000"]) == 0
        assert "includes $1,000.00 deposit" in capsys.readouterr().out

    def test_json_output(self, capsys, config_path, portfolio_path):
        assert main(["--config", config_path, "--json", "rebalance", portfolio_path]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["total"]["cents"] == 900000
        assert [s["symbol"] for s in data["symbols"]] == ["VOO", "BND"]
        assert [s["amount_needed"]["cents"] for s in data["symbols"]] == [-80000, 80000]

    def test_missing_portfolio(self, capsys, config_path, tmp_path):
        assert main(["--config", config_path, "rebalance", str(tmp_path / "none.csv")]) == 1
        assert "Holdings file not found" in capsys.readouterr().err

    def test_empty_portfolio(self, capsys, config_path, data_dir):
        assert main(["--config", config_path, "rebalance", str(data_dir / "portfolio_empty.csv")]) == 1
        assert "non-positive total" in capsys.readouterr().err

    def test_bad_amount_in_portfolio(self, capsys, config_path, write_file):
        path = write_file("bad.csv", "Symbol,Current Value\nVOO,twelve\n")
        assert main(["--config", config_path, "rebalance", str(path)]) == 1
        assert "Line 2" in capsys.readouterr().err

    def test_untracked_row_with_bad_amount_ignored(self, capsys, config_path, write_file):
        path = write_file("cash.csv", "Symbol,Current Value\nVOO,$800.00\nBND,$200.00\nSPAXX**,--\n")
        assert main(["--config", config_path, "rebalance", str(path)]) == 0
        assert "Total: $1,000.00" in capsys.readouterr().out

    def test_tracked_row_with_blank_amount(self, capsys, config_path, write_file):
        path = write_file("blank.csv", "Symbol,Current Value\nVOO,$800.00\nIVV,\n")
        assert main(["--config", config_path, "rebalance", str(path)]) == 1
        assert "Line 3" in capsys.readouterr().err

    def test_no_color_flag(self, capsys, config_path, portfolio_path):
        assert main(["--config", config_path, "--no-color", "rebalance", portfolio_path]) == 0
        out = capsys.readouterr().out
        assert "Needed: +$800.00" in out
        assert "[green]" not in out


@pytest.mark.integration
class TestDepositCli:
    """fin-tilt deposit"""

    def test_text_output(self, capsys, config_path):
        assert main(["--config", config_path, "deposit", "100"]) == 0
        assert capsys.readouterr().out.strip() == "VOO: $80.00\nBND: $20.00"

    def test_json_output(self, capsys, config_path):
        assert main(["--config", config_path, "--json", "deposit", "100.01"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [a["amount"]["cents"] for a in data["allocations"]] == [8000, 2000]
        assert data["remainder"]["cents"] == 1

    def test_invalid_amount_is_usage_error(self, capsys, config_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", config_path, "deposit", "lots"])
        assert exc_info.value.code == 2
        assert "Invalid amount" in capsys.readouterr().err


@pytest.mark.integration
class TestConfigErrors:
    """Configuration problems stop before any command runs"""

    def test_missing_config(self, capsys, tmp_path):
        assert main(["--config", str(tmp_path / "config.yaml"), "deposit", "100"]) == 1
        assert "Error parsing config" in capsys.readouterr().err

    def test_bad_sum(self, capsys, write_file):
        path = write_file("config.yaml", "stocks:\n  - symbol: VOO\n    target_percentage: 90\n")
        assert main(["--config", str(path), "deposit", "100"]) == 1
        assert "do not add up to 100" in capsys.readouterr().err

    def test_command_required(self, config_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", config_path])
        assert exc_info.value.code == 2


@pytest.mark.integration
class TestCommands:
    """Command objects report failures as results"""

    def test_rebalance_command_result(self, config_path, portfolio_path):
        policy = build_policy(load_config(config_path))
        result = RebalanceCommand(policy, portfolio_path).execute()

        assert result.status is CommandStatus.SUCCESS
        assert result.error is None
        assert result.data["report"].total == Money(900000)
        assert result.data["skipped_symbols"] == ["AAPL"]

    def test_deposit_command_failure(self, config_path):
        policy = build_policy(load_config(config_path))
        result = DepositCommand(policy, Money(-1)).execute()

        assert result.status is CommandStatus.FAILED
        assert not result.ok
        assert "must not be negative" in result.error

    def test_command_context_logged(self, caplog, config_path, portfolio_path):
        policy = build_policy(load_config(config_path))
        with caplog.at_level("INFO", logger="fin_tilt"):
            RebalanceCommand(policy, portfolio_path).execute()

        records = [r for r in caplog.records if r.name == "fin_tilt.commands.rebalance"]
        assert records
        assert all(r.command == "rebalance" for r in records)
        assert records[0].source == portfolio_path
