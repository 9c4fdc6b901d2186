"""Parse and format Rupiah amounts."""
import math
import re
import logging

from ..config.settings import CURRENCY_SYMBOL, MAX_AMOUNT

logger = logging.getLogger(__name__)

# Leading decimal number, the way a lenient float parser reads a prefix
_LEADING_NUMBER = re.compile(r'\d+(?:\.\d*)?|\.\d+')


def parse_amount(text) -> float:
    """
    Parse an amount from free-form text.

    Separator roles are decided by position and grouping:
    - 1,234.56 / 1.234,56 - rightmost separator is the decimal point
    - 12,50 / 12.5 - a single separator followed by at most 2 digits is decimal
    - 25.000 / 1,000,000 - anything else is a thousands separator

    Multiplier words are not expanded: "25 ribu" parses as 25.

    Args:
        text: String that may contain an amount

    Returns:
        Non-negative float, or 0 when no number is present
    """
    if not text or not isinstance(text, str):
        return 0

    # Keep digits and separators only
    cleaned = re.sub(r'[^\d.,]', '', text)

    if ',' in cleaned and '.' in cleaned:
        comma_pos = cleaned.rfind(',')
        period_pos = cleaned.rfind('.')

        if period_pos > comma_pos:
            # 1,234.56
            cleaned = cleaned.replace(',', '')
        else:
            # 1.234,56
            cleaned = cleaned.replace('.', '').replace(',', '.', 1)
    elif ',' in cleaned:
        cleaned = _resolve_single_separator(cleaned, ',')
    elif '.' in cleaned:
        cleaned = _resolve_single_separator(cleaned, '.')

    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        if cleaned:
            logger.debug(f"Could not parse amount: {text!r}")
        return 0

    value = float(match.group(0))
    if not math.isfinite(value):
        logger.debug(f"Amount out of range: {text[:40]!r}...")
        return 0

    return value


def _resolve_single_separator(cleaned: str, separator: str) -> str:
    """Decide whether a lone separator kind is a decimal point or grouping."""
    parts = cleaned.split(separator)
    if len(parts) == 2 and len(parts[1]) <= 2:
        return cleaned.replace(separator, '.')
    return cleaned.replace(separator, '')


def format_currency(amount: float) -> str:
    """
    Format amount as Rupiah, without decimals.

    Args:
        amount: Numeric amount

    Returns:
        Formatted string, e.g. "Rp 25.000"
    """
    formatted = f"{abs(amount):,.0f}".replace(',', '.')

    if amount < 0:
        return f"-{CURRENCY_SYMBOL} {formatted}"
    return f"{CURRENCY_SYMBOL} {formatted}"


def format_currency_compact(amount: float) -> str:
    """
    Format amount in compact form for charts and summaries.

    Examples: 5000000 -> "5.0M", 25000 -> "25K", 500 -> "500"
    """
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{amount / 1_000:.0f}K"
    return f"{amount:g}"


def is_valid_amount(amount) -> bool:
    """Check that an amount is a finite number above zero and below the ceiling."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return False
    if math.isnan(amount) or math.isinf(amount):
        return False
    return 0 < amount < MAX_AMOUNT
