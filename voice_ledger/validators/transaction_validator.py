"""
Confirmation checks before a transaction is persisted.

The interpreter is allowed to produce zero amounts and empty descriptions;
they are caught here, at review time.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from ..config.categories import categories_for
from ..config.settings import MAX_AMOUNT
from ..models import ParsedTransaction
from ..utils.currency_parser import is_valid_amount, format_currency

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of confirmation validation."""
    success: bool
    errors: List[str] = field(default_factory=list)


class TransactionValidator:
    """Validate a reviewed ParsedTransaction before it enters the ledger."""

    def validate(self, parsed: ParsedTransaction) -> ValidationResult:
        """
        Check amount, description and category.

        Args:
            parsed: Transaction as edited by the user

        Returns:
            ValidationResult listing every problem found
        """
        errors = []

        if not is_valid_amount(parsed.amount):
            errors.append(
                f"Invalid amount: must be greater than 0 and below {format_currency(MAX_AMOUNT)}"
            )

        if not parsed.description or not parsed.description.strip():
            errors.append("Empty description: please describe the transaction")

        allowed = categories_for(parsed.type)
        if parsed.category not in allowed:
            errors.append(
                f"Invalid category '{parsed.category}' for {parsed.type.value}: "
                f"choose one of {', '.join(allowed)}"
            )

        if errors:
            logger.debug(f"Validation failed: {errors}")

        return ValidationResult(success=not errors, errors=errors)
