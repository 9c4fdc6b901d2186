"""
Voice Ledger

Turn spoken transaction descriptions ("beli kopi 25000") into structured,
categorized ledger entries.
"""

__version__ = "0.1.0"

from voice_ledger.models import ParsedTransaction, Transaction, TransactionType
from voice_ledger.interpreter import TransactionInterpreter, interpret_transcript
from voice_ledger.utils.currency_parser import parse_amount

__all__ = [
    "ParsedTransaction",
    "Transaction",
    "TransactionType",
    "TransactionInterpreter",
    "interpret_transcript",
    "parse_amount",
]
