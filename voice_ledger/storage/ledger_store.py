"""JSON-file ledger of confirmed transactions."""
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..models import ParsedTransaction, Transaction

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Persist transactions as a JSON array in a single file.

    Every operation reads the file fresh, so several processes can share a
    ledger as long as they do not write at the same moment. A missing file
    is an empty ledger.
    """

    def __init__(self, path: Path):
        """
        Initialize ledger store.

        Args:
            path: Location of the ledger JSON file
        """
        self.path = Path(path)

    def list_all(self) -> List[Transaction]:
        """
        Load every transaction in insertion order.

        Raises:
            StorageError: If the file cannot be read or decoded
        """
        if not self.path.exists():
            return []

        try:
            raw = json.loads(self.path.read_text(encoding='utf-8') or '[]')
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to load transactions from {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise StorageError(f"Ledger file {self.path} does not contain a list")

        try:
            return [Transaction.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Corrupt transaction record in {self.path}: {e}") from e

    def get(self, transaction_id: str) -> Optional[Transaction]:
        """Find a transaction by id."""
        for transaction in self.list_all():
            if transaction.id == transaction_id:
                return transaction
        return None

    def append(self, transaction: Transaction) -> None:
        """Add a transaction to the end of the ledger."""
        transactions = self.list_all()
        transactions.append(transaction)
        self._save(transactions)
        logger.info(f"Added transaction {transaction.id} ({transaction.type.value}, {transaction.amount})")

    def add_parsed(
        self,
        parsed: ParsedTransaction,
        date: Optional[datetime] = None
    ) -> Transaction:
        """Persist a confirmed ParsedTransaction and return the stored entry."""
        transaction = Transaction.from_parsed(parsed, date=date)
        self.append(transaction)
        return transaction

    def update(self, transaction: Transaction) -> None:
        """
        Replace a stored transaction with the same id.

        Raises:
            TransactionNotFoundError: If no transaction has that id
        """
        transactions = self.list_all()

        for index, existing in enumerate(transactions):
            if existing.id == transaction.id:
                transactions[index] = transaction
                self._save(transactions)
                logger.info(f"Updated transaction {transaction.id}")
                return

        raise TransactionNotFoundError(f"Transaction not found: {transaction.id}")

    def remove(self, transaction_id: str) -> bool:
        """
        Delete a transaction by id.

        Returns:
            True if a transaction was removed, False if the id was unknown
        """
        transactions = self.list_all()
        remaining = [t for t in transactions if t.id != transaction_id]

        if len(remaining) == len(transactions):
            logger.debug(f"No transaction with id {transaction_id} to remove")
            return False

        self._save(remaining)
        logger.info(f"Removed transaction {transaction_id}")
        return True

    def clear(self) -> None:
        """Delete the whole ledger."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to clear ledger {self.path}: {e}") from e

    def by_date_range(self, start: datetime, end: datetime) -> List[Transaction]:
        """Transactions dated between start and end, inclusive."""
        return [t for t in self.list_all() if start <= t.date <= end]

    def by_category(self, category: str) -> List[Transaction]:
        """Transactions in a category (case-insensitive)."""
        wanted = category.lower()
        return [t for t in self.list_all() if t.category.lower() == wanted]

    def _save(self, transactions: List[Transaction]) -> None:
        payload = json.dumps([t.to_dict() for t in transactions], indent=2, ensure_ascii=False)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write next to the target, then swap it in
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                    tmp.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to save transactions to {self.path}: {e}") from e


class StorageError(Exception):
    """Ledger could not be read or written."""
    pass


class TransactionNotFoundError(StorageError):
    """No stored transaction has the requested id."""
    pass
