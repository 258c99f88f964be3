"""Utility functions for ledgerport."""

from ledgerport.utils.date_parser import parse_date, try_parse_date
from ledgerport.utils.amount_parser import parse_amount
from ledgerport.utils.windowing import compute_window, get_top_offset

__all__ = ["parse_date", "try_parse_date", "parse_amount", "compute_window", "get_top_offset"]
