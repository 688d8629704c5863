"""Terminal and JSON presentation of rebalance results"""

from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from tilt_calculator import DepositAllocation, DriftEntry, Money, RebalanceReport

SEPARATOR = "-" * 60


def make_console(no_color: bool = False, file: Optional[TextIO] = None) -> Console:
    """
    Console for report output.

    rich drops colour on its own when the output is not a terminal or
    NO_COLOR is set. Lines are never wrapped so piped output stays parseable.
    """
    return Console(file=file, no_color=no_color, highlight=False, soft_wrap=True)


def _signed(text: str, positive: bool) -> str:
    return f"[green]+{text}[/green]" if positive else f"[red]{text}[/red]"


def _render_entry(entry: DriftEntry) -> List[str]:
    needed = _signed(entry.amount_needed.format(), entry.amount_needed.cents > 0)
    drift = _signed(f"{entry.drift:.2f}%", entry.drift > 0)
    lines = [
        "",
        SEPARATOR,
        f"{escape(entry.symbol)} - {entry.current_percentage:.2f}% ({drift})",
        SEPARATOR,
    ]
    if entry.description:
        lines.append(escape(entry.description))
    lines.append(f"Needed: {needed}")
    lines.append(f"Current Total: {entry.current_amount.format(with_separators=True)}")
    return lines


def render_report(report: RebalanceReport) -> str:
    """Drift report as rich markup; print it through a Console"""
    lines: List[str] = []
    for entry in report.entries:
        lines.extend(_render_entry(entry))

    lines.extend(["", SEPARATOR])
    total = report.total.format(with_separators=True)
    if report.deposit.cents > 0:
        lines.append(f"Total: {total} (includes {report.deposit.format(with_separators=True)} deposit)")
    else:
        lines.append(f"Total: {total}")
    return "\n".join(lines)


def render_allocation(allocation: DepositAllocation) -> str:
    lines = [f"{escape(a.symbol)}: {a.amount.format()}" for a in allocation.allocations]
    if allocation.remainder:
        lines.append(f"Remainder: {allocation.remainder.format()}")
    return "\n".join(lines)


def _money(amount: Money) -> Dict[str, Any]:
    return {"cents": amount.cents, "formatted": amount.format(with_separators=True)}


def report_to_dict(report: RebalanceReport) -> Dict[str, Any]:
    """JSON-ready view of a report; values are passed through untouched"""
    return {
        "total": _money(report.total),
        "deposit": _money(report.deposit),
        "symbols": [
            {
                "symbol": entry.symbol,
                "description": entry.description,
                "amount": _money(entry.current_amount),
                "current_percentage": entry.current_percentage,
                "target_percentage": entry.target_percentage,
                "drift": entry.drift,
                "amount_needed": _money(entry.amount_needed),
                "action": entry.action,
            }
            for entry in report.entries
        ],
    }


def allocation_to_dict(allocation: DepositAllocation) -> Dict[str, Any]:
    return {
        "deposit": _money(allocation.deposit),
        "allocations": [
            {
                "symbol": a.symbol,
                "target_percentage": a.target_percentage,
                "amount": _money(a.amount),
            }
            for a in allocation.allocations
        ],
        "remainder": _money(allocation.remainder),
    }
