"""Data models for voice transaction tracking."""
from .transaction import ParsedTransaction, Transaction, TransactionType, generate_id, to_local_naive
from .summary import TransactionSummary

__all__ = [
    'ParsedTransaction',
    'Transaction',
    'TransactionType',
    'TransactionSummary',
    'generate_id',
    'to_local_naive',
]
