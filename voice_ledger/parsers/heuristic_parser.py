"""Offline keyword-based transaction interpretation."""
import logging
from typing import Sequence, Tuple

from ..config.categories import (
    OTHER,
    INCOME_KEYWORDS,
    EXPENSE_KEYWORDS,
    CATEGORY_KEYWORDS,
    categories_for,
)
from ..config.settings import FALLBACK_CONFIDENCE
from ..models import ParsedTransaction, TransactionType
from ..utils.currency_parser import parse_amount

logger = logging.getLogger(__name__)


class HeuristicParser:
    """
    Deterministic fallback used when the NLU service is unavailable.

    Type and category come from ordered keyword tables (first match wins),
    the amount from parse_amount over the whole transcript. It has no
    failure mode, so it can always back up the remote path.
    """

    def __init__(
        self,
        income_keywords: Sequence[str] = INCOME_KEYWORDS,
        expense_keywords: Sequence[str] = EXPENSE_KEYWORDS,
        category_keywords: Sequence[Tuple[str, str]] = CATEGORY_KEYWORDS,
        confidence: float = FALLBACK_CONFIDENCE
    ):
        """
        Initialize heuristic parser.

        Args:
            income_keywords: Keywords that mark income
            expense_keywords: Keywords that mark expense
            category_keywords: Ordered (keyword, category) pairs
            confidence: Confidence reported for every result
        """
        self.income_keywords = tuple(income_keywords)
        self.expense_keywords = tuple(expense_keywords)
        self.category_keywords = tuple(category_keywords)
        self.confidence = confidence

    def parse(self, transcript: str) -> ParsedTransaction:
        """
        Interpret a transcript without any remote call.

        Args:
            transcript: Raw transcript text

        Returns:
            ParsedTransaction with source "fallback"
        """
        transcript = transcript if isinstance(transcript, str) else ""
        text = transcript.lower()

        transaction_type = self.classify_type(text)
        category = self.classify_category(text, transaction_type)

        return ParsedTransaction(
            type=transaction_type,
            amount=parse_amount(transcript),
            category=category,
            description=transcript,
            confidence=self.confidence,
            source="fallback",
        )

    def classify_type(self, text: str) -> TransactionType:
        """Income if any income keyword appears, else expense."""
        if any(keyword in text for keyword in self.income_keywords):
            return TransactionType.INCOME
        if any(keyword in text for keyword in self.expense_keywords):
            return TransactionType.EXPENSE
        return TransactionType.EXPENSE

    def classify_category(self, text: str, transaction_type: TransactionType) -> str:
        """First keyword whose category belongs to the type's taxonomy."""
        allowed = categories_for(transaction_type)

        for keyword, category in self.category_keywords:
            if category in allowed and keyword in text:
                logger.debug(f"Keyword '{keyword}' matched category {category}")
                return category

        return OTHER
