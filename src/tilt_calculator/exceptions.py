from typing import Optional


class TiltError(Exception):
    """Base class for all rebalancing failures"""
    pass


class ParseError(TiltError, ValueError):
    """Raised when a currency amount cannot be parsed"""

    def __init__(self, value: str, line: Optional[int] = None, reason: Optional[str] = None):
        self.value = value
        self.line = line
        self.reason = reason
        message = f"Invalid amount {value!r}"
        if reason:
            message += f": {reason}"
        if line is not None:
            message = f"Line {line}: {message}"
        super().__init__(message)

    def at_line(self, line: int) -> "ParseError":
        """Return a copy of this error annotated with the input line number"""
        return ParseError(self.value, line=line, reason=self.reason)


class ConfigError(TiltError, ValueError):
    """Raised when an allocation policy fails validation"""
    pass


class AllocationSumError(ConfigError):
    """Raised when target fractions do not add up to 1.0"""

    def __init__(self, total: float):
        self.total = total
        super().__init__(
            f"Target percentages do not add up to 100 (got {total * 100:.6f})"
        )


class DuplicateSymbolError(ConfigError):
    """Raised when a symbol is claimed by more than one allocation entry"""

    def __init__(self, symbol: str, owner: str, claimant: str):
        self.symbol = symbol
        self.owner = owner
        self.claimant = claimant
        super().__init__(
            f"Symbol {symbol} appears multiple times (claimed by {owner} and {claimant})"
        )


class ZeroTotalError(TiltError):
    """Raised when rebalancing a portfolio whose total value is not positive"""

    def __init__(self, total):
        self.total = total
        super().__init__(
            f"Portfolio total is {total}; percentages are undefined for a non-positive total"
        )


class InvalidDepositError(TiltError, ValueError):
    """Raised when a deposit amount cannot be split"""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Deposit amount must not be negative, got {amount}")


class HoldingsFormatError(TiltError):
    """Raised when a holdings export is missing required columns"""
    pass
