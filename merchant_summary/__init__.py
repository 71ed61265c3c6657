"""Merchant withdrawal summaries from spreadsheet exports."""

__version__ = "1.0.0"
