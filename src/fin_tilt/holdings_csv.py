"""Streaming reader for brokerage holdings exports"""

import csv
from pathlib import Path
from typing import Callable, Iterator, List, Optional, TextIO

from tilt_calculator import AllocationPolicy, HoldingRecord, HoldingsFormatError, Money, ParseError
from fin_tilt.logger import AppLogger

app_logger = AppLogger(__name__)


def _column_index(header: List[str], column: str) -> int:
    try:
        return header.index(column)
    except ValueError:
        raise HoldingsFormatError(
            f"CSV file must have '{column}' column (found: {', '.join(h for h in header if h)})"
        ) from None


def iter_holdings(stream: TextIO, symbol_column: str = "Symbol",
                  amount_column: str = "Current Value",
                  policy: Optional[AllocationPolicy] = None,
                  on_untracked: Optional[Callable[[str], None]] = None) -> Iterator[HoldingRecord]:
    """
    Yield one HoldingRecord per usable row of a CSV export.

    Rows too short to contain both columns (such as the disclaimer lines at
    the end of Fidelity exports) and rows without a symbol are skipped. When
    a policy is given, rows for symbols it does not track are dropped before
    their amount is read and reported through on_untracked. Every other row
    must carry a valid amount: a blank or malformed one raises ParseError
    carrying the line number.
    """
    reader = csv.reader(stream)
    try:
        header = [column.strip() for column in next(reader)]
    except StopIteration:
        raise HoldingsFormatError("CSV file is empty") from None

    symbol_index = _column_index(header, symbol_column)
    amount_index = _column_index(header, amount_column)
    required = max(symbol_index, amount_index)

    for row in reader:
        if len(row) <= required:
            if any(field.strip() for field in row):
                app_logger.log_debug(f"Skipping short row at line {reader.line_num}")
            continue

        symbol = row[symbol_index].strip()
        if not symbol:
            continue

        if policy is not None and policy.resolve(symbol) is None:
            app_logger.log_debug(f"Ignoring untracked symbol {symbol!r} at line {reader.line_num}")
            if on_untracked is not None:
                on_untracked(symbol)
            continue

        raw_amount = row[amount_index].strip()
        if not raw_amount:
            raise ParseError(raw_amount, line=reader.line_num, reason=f"missing amount for {symbol}")

        try:
            amount = Money.parse(raw_amount)
        except ParseError as e:
            raise e.at_line(reader.line_num) from e

        yield HoldingRecord(symbol=symbol, amount=amount)


def read_holdings(path: str | Path, symbol_column: str = "Symbol",
                  amount_column: str = "Current Value",
                  policy: Optional[AllocationPolicy] = None,
                  on_untracked: Optional[Callable[[str], None]] = None) -> Iterator[HoldingRecord]:
    """Open a holdings CSV and stream its records"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Holdings file not found: {path}")

    app_logger.log_info(f"Reading holdings from: {path}")
    # utf-8-sig drops the byte order mark some brokers prepend
    with open(path, 'r', newline='', encoding='utf-8-sig') as f:
        yield from iter_holdings(f, symbol_column, amount_column,
                                 policy=policy, on_untracked=on_untracked)
