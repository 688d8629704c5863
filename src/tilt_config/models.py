"""Pydantic models for fin-tilt configuration with validation."""

from decimal import Decimal
from typing import List, Literal
from pydantic import BaseModel, Field, field_validator


class StockConfig(BaseModel):
    """One target allocation as written in config.yaml."""

    symbol: str = Field(
        min_length=1,
        description="Canonical ticker that holdings are aggregated under"
    )
    target_percentage: Decimal = Field(
        ge=0,
        le=100,
        description="Target share of the portfolio, 0-100"
    )
    description: str = Field(
        default="",
        description="Free text shown under the symbol in reports"
    )
    alternatives: List[str] = Field(
        default_factory=list,
        description="Alias tickers counted toward this symbol (e.g. IVV for VOO)"
    )

    @field_validator("target_percentage", mode="before")
    @classmethod
    def exact_percentage(cls, v):
        # YAML floats become their shortest decimal form, 33.33 stays 33.33
        return Decimal(str(v)) if isinstance(v, float) else v

    @field_validator("symbol")
    @classmethod
    def strip_symbol(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("symbol must not be blank")
        return v

    @property
    def target_fraction(self) -> float:
        """Target percentage on the 0-1 policy scale, divided exactly."""
        return float(self.target_percentage / 100)


class HoldingsCsvConfig(BaseModel):
    """Column layout of the brokerage holdings export."""

    symbol_column: str = Field(
        default="Symbol",
        min_length=1,
        description="Header of the column holding ticker symbols"
    )
    amount_column: str = Field(
        default="Current Value",
        min_length=1,
        description="Header of the column holding current market value"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Root log level"
    )
    format: Literal["text", "json"] = Field(
        default="text",
        description="Log line format"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Root application configuration."""

    stocks: List[StockConfig] = Field(
        min_length=1,
        description="Target asset allocation"
    )
    holdings_csv: HoldingsCsvConfig = Field(
        default_factory=HoldingsCsvConfig,
        description="Holdings export column layout"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )
