"""Ledger analytics."""
from .transaction_analyzer import TransactionAnalyzer, PERIODS

__all__ = ['TransactionAnalyzer', 'PERIODS']
