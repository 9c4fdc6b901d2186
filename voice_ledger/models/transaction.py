"""Transaction data models."""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from enum import Enum


class TransactionType(Enum):
    """Transaction direction."""
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_value(cls, value) -> "TransactionType":
        """Resolve a raw value: only "income" means income, anything else is expense."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.INCOME.value:
            return cls.INCOME
        return cls.EXPENSE


@dataclass
class ParsedTransaction:
    """
    Transaction interpreted from a single transcript.

    Created fresh for every utterance and edited during review; it is
    copied into a Transaction once the user confirms.

    Attributes:
        type: Income or expense
        amount: Amount in base currency unit (Rupiah)
        category: Category from the taxonomy matching type
        description: Short description of the transaction
        confidence: Interpretation confidence (0.0-1.0)
        source: Path that produced it ("nlu" or "fallback")
    """
    type: TransactionType
    amount: float
    category: str
    description: str = ""
    confidence: float = 0.5
    source: str = "nlu"

    def __post_init__(self):
        """Clamp confidence and reject negative amounts."""
        if self.amount < 0:
            raise ValueError("amount cannot be negative")
        self.confidence = min(max(float(self.confidence), 0.0), 1.0)

    @property
    def confidence_level(self) -> str:
        """Confidence bucket used for colour coding: high, medium or low."""
        if self.confidence > 0.8:
            return "high"
        if self.confidence > 0.5:
            return "medium"
        return "low"

    def to_dict(self) -> dict:
        """Convert parsed transaction to dictionary."""
        return {
            'type': self.type.value,
            'amount': self.amount,
            'category': self.category,
            'description': self.description,
            'confidence': round(self.confidence, 2),
            'source': self.source,
        }


@dataclass
class Transaction:
    """
    A confirmed ledger entry.

    Attributes:
        id: Unique identifier, generated at persistence time
        type: Income or expense
        amount: Amount in base currency unit
        category: Category from the taxonomy matching type
        description: Transaction description
        date: Date the transaction happened
        created_at: When the entry was recorded
    """
    id: str
    type: TransactionType
    amount: float
    category: str
    description: str
    date: datetime
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Store dates as naive local time so they compare with datetime.now()."""
        self.date = to_local_naive(self.date)
        self.created_at = to_local_naive(self.created_at)

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedTransaction,
        date: Optional[datetime] = None
    ) -> "Transaction":
        """Build a ledger entry from a reviewed ParsedTransaction."""
        now = datetime.now()
        return cls(
            id=generate_id(),
            type=parsed.type,
            amount=parsed.amount,
            category=parsed.category,
            description=parsed.description.strip(),
            date=date or now,
            created_at=now,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Rebuild a transaction from its dictionary form."""
        return cls(
            id=str(data['id']),
            type=TransactionType.from_value(data.get('type')),
            amount=float(data.get('amount', 0.0)),
            category=data.get('category', 'Other'),
            description=data.get('description', ''),
            date=datetime.fromisoformat(data['date']),
            created_at=datetime.fromisoformat(data.get('created_at') or data['date']),
        )

    def to_dict(self) -> dict:
        """Convert transaction to dictionary."""
        return {
            'id': self.id,
            'type': self.type.value,
            'amount': self.amount,
            'category': self.category,
            'description': self.description,
            'date': self.date.isoformat(),
            'created_at': self.created_at.isoformat(),
        }


def to_local_naive(value: datetime) -> datetime:
    """Convert a timezone-aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def generate_id() -> str:
    """Generate a unique transaction id."""
    return uuid.uuid4().hex
