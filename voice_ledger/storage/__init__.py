"""Ledger persistence."""
from .ledger_store import LedgerStore, StorageError, TransactionNotFoundError

__all__ = ['LedgerStore', 'StorageError', 'TransactionNotFoundError']
