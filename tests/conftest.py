"""Pytest configuration and fixtures."""
import asyncio
import pytest
from datetime import datetime

from voice_ledger.models import ParsedTransaction, Transaction, TransactionType
from voice_ledger.nlu import BaseNLUClient, NLUError
from voice_ledger.storage import LedgerStore


class FakeNLUClient(BaseNLUClient):
    """NLU client returning a canned response (or raising) without network."""

    def __init__(self, response=None, error=None, delay=0.0):
        super().__init__(timeout=1.0)
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_client_factory():
    """Build FakeNLUClient instances."""
    return FakeNLUClient


@pytest.fixture
def failing_client():
    """Client whose every call fails like an unreachable service."""
    return FakeNLUClient(error=NLUError("connection refused"))


@pytest.fixture
def sample_parsed():
    """Create a sample parsed transaction."""
    return ParsedTransaction(
        type=TransactionType.EXPENSE,
        amount=25000.0,
        category="Food",
        description="Beli kopi",
        confidence=0.9
    )


@pytest.fixture
def sample_transactions():
    """Create a list of ledger transactions across two months."""
    return [
        Transaction(
            id="t1",
            type=TransactionType.INCOME,
            amount=5000000.0,
            category="Salary",
            description="Gaji bulanan",
            date=datetime(2024, 11, 25, 9, 0),
            created_at=datetime(2024, 11, 25, 9, 0)
        ),
        Transaction(
            id="t2",
            type=TransactionType.EXPENSE,
            amount=25000.0,
            category="Food",
            description="Beli kopi",
            date=datetime(2024, 12, 1, 8, 30),
            created_at=datetime(2024, 12, 1, 8, 30)
        ),
        Transaction(
            id="t3",
            type=TransactionType.EXPENSE,
            amount=75000.0,
            category="Transport",
            description="Isi bensin",
            date=datetime(2024, 12, 2, 17, 45),
            created_at=datetime(2024, 12, 2, 17, 45)
        ),
        Transaction(
            id="t4",
            type=TransactionType.INCOME,
            amount=1000000.0,
            category="Freelance",
            description="Proyek desain",
            date=datetime(2024, 12, 3, 12, 0),
            created_at=datetime(2024, 12, 3, 12, 0)
        ),
    ]


@pytest.fixture
def ledger_path(tmp_path):
    """Path to a ledger file inside a temporary directory."""
    return tmp_path / "data" / "transactions.json"


@pytest.fixture
def ledger_store(ledger_path):
    """Create an empty ledger store."""
    return LedgerStore(ledger_path)
