"""Utility functions for banksync."""

from banksync.utils.date_parser import parse_date
from banksync.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
