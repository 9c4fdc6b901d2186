"""Ledger analytics: totals, category breakdowns and monthly trends."""
import pandas as pd
from datetime import datetime, timedelta
from typing import List, Dict, Optional

from ..models import Transaction, TransactionType, TransactionSummary

PERIODS = ('day', 'week', 'month', 'all')

COLUMNS = ['id', 'date', 'type', 'category', 'amount', 'description']


class TransactionAnalyzer:
    """
    Summaries of ledger transactions for the stats and history views.

    An empty transaction list is allowed and yields zero totals.
    """

    def __init__(self, transactions: List[Transaction]):
        """Initialize analyzer with transaction list."""
        self.transactions = list(transactions)
        self.df = self._to_dataframe()

    def _to_dataframe(self) -> pd.DataFrame:
        """Convert transactions to pandas DataFrame."""
        data = []
        for txn in self.transactions:
            data.append({
                'id': txn.id,
                'date': txn.date,
                'type': txn.type.value,
                'category': txn.category,
                'amount': txn.amount,
                'description': txn.description
            })

        df = pd.DataFrame(data, columns=COLUMNS)
        df['date'] = pd.to_datetime(df['date'])
        df['amount'] = df['amount'].astype(float)
        return df.sort_values('date')

    def get_summary(self) -> TransactionSummary:
        """Total income, total expense and balance."""
        totals = self.df.groupby('type')['amount'].sum()
        return TransactionSummary(
            total_income=float(totals.get(TransactionType.INCOME.value, 0.0)),
            total_expense=float(totals.get(TransactionType.EXPENSE.value, 0.0)),
            transaction_count=len(self.df)
        )

    def filter_by_period(self, period: str, now: Optional[datetime] = None) -> List[Transaction]:
        """
        Transactions within a period, newest first.

        Args:
            period: 'day' (since midnight), 'week' (last 7 days),
                'month' (since the 1st) or 'all'
            now: Reference time (defaults to current time)

        Returns:
            List of transactions sorted by date descending
        """
        if period not in PERIODS:
            raise ValueError(f"Unknown period: {period}. Choose from {', '.join(PERIODS)}")

        now = now or datetime.now()

        if period == 'day':
            start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        elif period == 'week':
            start = now - timedelta(days=7)
        elif period == 'month':
            start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        else:
            start = None

        selected = [t for t in self.transactions if start is None or t.date >= start]
        return sorted(selected, key=lambda t: t.date, reverse=True)

    def category_breakdown(self, transaction_type: TransactionType) -> List[Dict]:
        """
        Amount per category for one transaction type.

        Returns:
            List of {category, amount, percentage} sorted by amount descending
        """
        subset = self.df[self.df['type'] == transaction_type.value]
        if subset.empty:
            return []

        by_category = subset.groupby('category')['amount'].sum()
        by_category = by_category.sort_values(ascending=False, kind='stable')
        total = by_category.sum()

        return [
            {
                'category': category,
                'amount': float(amount),
                'percentage': float(amount / total * 100) if total else 0.0
            }
            for category, amount in by_category.items()
        ]

    def monthly_trend(self) -> List[Dict]:
        """
        Income and expense per calendar month.

        Returns:
            List of {month: 'YYYY-MM', income, expense} sorted by month
        """
        if self.df.empty:
            return []

        df = self.df.assign(month=self.df['date'].dt.strftime('%Y-%m'))
        pivot = df.pivot_table(
            index='month',
            columns='type',
            values='amount',
            aggfunc='sum',
            fill_value=0.0
        ).reindex(columns=[TransactionType.INCOME.value, TransactionType.EXPENSE.value], fill_value=0.0)

        return [
            {
                'month': month,
                'income': float(row[TransactionType.INCOME.value]),
                'expense': float(row[TransactionType.EXPENSE.value])
            }
            for month, row in pivot.sort_index().iterrows()
        ]
