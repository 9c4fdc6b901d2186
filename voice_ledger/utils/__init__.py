"""Utility functions."""
from .logger import setup_logger, log_interpretation_audit
from .currency_parser import (
    parse_amount,
    format_currency,
    format_currency_compact,
    is_valid_amount
)

__all__ = [
    'setup_logger',
    'log_interpretation_audit',
    'parse_amount',
    'format_currency',
    'format_currency_compact',
    'is_valid_amount'
]
