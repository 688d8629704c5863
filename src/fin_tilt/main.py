"""
fin-tilt command line entry point.
"""

import argparse
import json
import sys
from typing import List, Optional

from tilt_calculator import ConfigError, Money, ParseError
from tilt_config import build_policy, load_config
from fin_tilt.commands import Command, DepositCommand, RebalanceCommand
from fin_tilt.logger import AppLogger, configure_root_logger
from fin_tilt.rendering import (
    allocation_to_dict,
    make_console,
    render_allocation,
    render_report,
    report_to_dict,
)

app_logger = AppLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _money_argument(text: str) -> Money:
    """argparse type for dollar amounts such as 1000 or 250.50"""
    try:
        return Money.parse(text)
    except ParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fin-tilt",
        description="Compare a portfolio against a target asset allocation.",
    )
    parser.add_argument("--config", default="config.yaml",
                        help="Config file that specifies a desired asset allocation (default: %(default)s)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper,
                        help="Override the log level from the config file")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    rebalance = subparsers.add_parser(
        "rebalance", help="Rebalance portfolio based on current values in CSV file")
    rebalance.add_argument("portfolio", help="Holdings CSV exported from the brokerage")
    rebalance.add_argument("--deposit", "--toDeposit", dest="deposit", type=_money_argument,
                           default=Money(0), help="Additional amount to deposit, in dollars")

    deposit = subparsers.add_parser("deposit", help="Split a deposit across the target allocation")
    deposit.add_argument("amount", type=_money_argument, help="Amount to deposit, in dollars")

    return parser


def _render(command: Command, data: dict, args: argparse.Namespace) -> str:
    if isinstance(command, RebalanceCommand):
        report = data["report"]
        if args.json:
            return json.dumps(report_to_dict(report), indent=2)
        return render_report(report)

    allocation = data["allocation"]
    if args.json:
        return json.dumps(allocation_to_dict(allocation), indent=2)
    return render_allocation(allocation)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_root_logger(args.log_level or "WARNING")

    try:
        config = load_config(args.config)
        policy = build_policy(config)
    except (FileNotFoundError, ConfigError) as e:
        print(f"Error parsing config: {e}", file=sys.stderr)
        return 1

    configure_root_logger(args.log_level or config.logging.level, config.logging.format)

    if args.command == "rebalance":
        command: Command = RebalanceCommand(
            policy, args.portfolio, deposit=args.deposit, csv_config=config.holdings_csv)
    else:
        command = DepositCommand(policy, args.amount)

    app_logger.log_debug(f"Running {command!r}")
    result = command.execute()
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    output = _render(command, result.data, args)
    if args.json:
        print(output)
    else:
        make_console(no_color=args.no_color).print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
