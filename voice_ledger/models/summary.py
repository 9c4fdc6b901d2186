"""Ledger summary model."""
from dataclasses import dataclass


@dataclass
class TransactionSummary:
    """
    Totals over a set of transactions.

    Attributes:
        total_income: Sum of income amounts
        total_expense: Sum of expense amounts
        transaction_count: Number of transactions summarised
    """
    total_income: float = 0.0
    total_expense: float = 0.0
    transaction_count: int = 0

    @property
    def balance(self) -> float:
        """Income minus expense."""
        return self.total_income - self.total_expense

    def to_dict(self) -> dict:
        """Convert summary to dictionary."""
        return {
            'total_income': round(self.total_income, 2),
            'total_expense': round(self.total_expense, 2),
            'balance': round(self.balance, 2),
            'transaction_count': self.transaction_count,
        }
