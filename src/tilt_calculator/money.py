"""Fixed-point currency amounts stored as integer cents"""

import math
import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP, localcontext
from typing import Any, Union

from pydantic_core import core_schema

from .exceptions import ParseError

# Optional sign on either side of the currency symbol, dollars with or without
# thousands separators, and up to two fractional digits.
_AMOUNT_RE = re.compile(
    r"^(?P<outer>[-+]?)\$?(?P<inner>[-+]?)"
    r"(?P<dollars>\d{1,3}(?:,\d{3})+|\d+)?"
    r"(?:\.(?P<cents>\d{1,2}))?$",
    re.ASCII,
)

Fraction = Union[float, int, Decimal]


def _as_decimal(fraction: Fraction) -> Decimal:
    """Exact decimal form of a fraction, taken from its shortest repr"""
    if isinstance(fraction, Decimal):
        return fraction
    return Decimal(str(fraction))


@dataclass(frozen=True, order=True, slots=True)
class Money:
    """Signed amount of money in integer cents"""

    cents: int = 0

    def __post_init__(self):
        if isinstance(self.cents, bool) or not isinstance(self.cents, int):
            raise TypeError(f"Money requires integer cents, got {type(self.cents).__name__}")

    @classmethod
    def parse(cls, text: str) -> "Money":
        """
        Parse a decimal-dollar string such as "$1,234.56" or "-12.5".

        A missing fractional part means whole dollars. Raises ParseError
        when the text is not a base-10 dollar amount.
        """
        if not isinstance(text, str):
            raise ParseError(repr(text), reason="expected a string")

        match = _AMOUNT_RE.match(text.strip())
        if not match or (match["dollars"] is None and match["cents"] is None):
            raise ParseError(text, reason="not a decimal dollar amount")
        if match["outer"] and match["inner"]:
            raise ParseError(text, reason="more than one sign")

        dollars = int((match["dollars"] or "0").replace(",", ""))
        cents = int((match["cents"] or "0").ljust(2, "0"))
        value = dollars * 100 + cents
        if "-" in (match["outer"], match["inner"]):
            value = -value
        return cls(value)

    @classmethod
    def from_float_rounded(cls, value: float) -> "Money":
        """Round a float amount of cents half away from zero"""
        if not math.isfinite(value):
            raise ValueError(f"Cannot convert non-finite value {value} to money")
        return cls(int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP)))

    def scale_floor(self, fraction: Fraction) -> "Money":
        """Multiply by a fraction and round down to whole cents"""
        with localcontext() as ctx:
            ctx.prec = 60
            scaled = Decimal(self.cents) * _as_decimal(fraction)
            return Money(int(scaled.to_integral_value(rounding=ROUND_FLOOR)))

    def format(self, with_separators: bool = False) -> str:
        dollars, cents = divmod(abs(self.cents), 100)
        text = f"${dollars:,}.{cents:02d}" if with_separators else f"${dollars}.{cents:02d}"
        return "-" + text if self.cents < 0 else text

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents + other.cents)

    def __radd__(self, other: Any) -> "Money":
        # sum() starts from the integer 0
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(-self.cents)

    def __abs__(self) -> "Money":
        return Money(abs(self.cents))

    def __bool__(self) -> bool:
        return self.cents != 0

    def __int__(self) -> int:
        return self.cents

    def __str__(self) -> str:
        return self.format(with_separators=True)

    def __repr__(self) -> str:
        return f"Money({self.cents})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda m: m.cents),
        )

    @classmethod
    def _coerce(cls, value: Any) -> "Money":
        if isinstance(value, Money):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Cannot interpret {value!r} as money")


ZERO = Money(0)


def format_money(amount: Money, with_separators: bool = False) -> str:
    """Render an amount as $D.CC, sign before the currency symbol"""
    return amount.format(with_separators)
