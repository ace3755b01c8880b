"""Utility functions for ledgerkit."""

from ledgerkit.utils.csv_parser import parse_csv
from ledgerkit.utils.amount_parser import parse_amount, parse_balance

__all__ = ["parse_csv", "parse_amount", "parse_balance"]
