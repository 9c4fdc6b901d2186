"""Validation of reviewed transactions."""
from .transaction_validator import TransactionValidator, ValidationResult

__all__ = ['TransactionValidator', 'ValidationResult']
