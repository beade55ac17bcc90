"""Command-line client for trading through the Alpaca brokerage API."""

__version__ = "0.3.0"
