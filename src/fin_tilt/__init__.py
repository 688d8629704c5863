"""Portfolio rebalancing recommendations from a brokerage holdings export."""

__version__ = "1.0.0"
