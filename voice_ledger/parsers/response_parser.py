"""
Parse NLU responses into ParsedTransaction objects.

The service is asked for strict JSON but may wrap it in prose or markdown
fences, change field casing, or send numbers as strings. Everything is
coerced here; anything unusable raises MalformedResponseError.
"""
import json
import logging
import math
from typing import Any, Iterator, Optional

from ..config.categories import normalize_category
from ..config.settings import DEFAULT_NLU_CONFIDENCE
from ..models import ParsedTransaction, TransactionType
from ..nlu.base_client import MalformedResponseError
from ..utils.currency_parser import parse_amount

logger = logging.getLogger(__name__)


def extract_json_object(text: str) -> dict:
    """
    Find the first balanced {...} region that decodes to a JSON object.

    Braces inside JSON strings are ignored while matching.

    Args:
        text: Response text, possibly with surrounding prose

    Returns:
        Decoded dictionary

    Raises:
        MalformedResponseError: If no JSON object can be found
    """
    if not text or not isinstance(text, str):
        raise MalformedResponseError("Empty NLU response")

    for candidate in _balanced_regions(text):
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise MalformedResponseError("No JSON object found in NLU response")


def _balanced_regions(text: str) -> Iterator[str]:
    """Yield every balanced brace region, in order of its opening brace."""
    start = text.find('{')
    while start != -1:
        end = _matching_brace(text, start)
        if end is not None:
            yield text[start:end + 1]
        start = text.find('{', start + 1)


def _matching_brace(text: str, start: int) -> Optional[int]:
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return index

    return None


def parse_nlu_response(text: str) -> ParsedTransaction:
    """
    Build a ParsedTransaction from raw NLU output.

    Coercion rules:
    - type: income only if the value is "income", otherwise expense
    - amount: run through parse_amount (numbers are converted to text first)
    - category: mapped onto the taxonomy of the type, "Other" if unknown
    - description: empty string if missing
    - confidence: 0.5 if missing or not numeric, clamped to [0, 1]

    Raises:
        MalformedResponseError: If the response holds no JSON object
    """
    payload = extract_json_object(text)

    # Field names are matched case-insensitively
    fields = {
        str(key).strip().lower(): value
        for key, value in payload.items()
    }

    transaction_type = TransactionType.from_value(fields.get('type'))
    description = fields.get('description')

    return ParsedTransaction(
        type=transaction_type,
        amount=coerce_amount(fields.get('amount')),
        category=normalize_category(fields.get('category'), transaction_type),
        description=str(description).strip() if description is not None else "",
        confidence=coerce_confidence(fields.get('confidence')),
        source="nlu",
    )


def coerce_amount(value: Any) -> float:
    """Convert an extracted amount of any JSON type into a non-negative float."""
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        return parse_amount(str(value))

    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        if value.is_integer():
            return parse_amount(str(int(value)))
        # Two decimals keep the fractional part on the decimal side of the
        # separator heuristic
        return parse_amount(f"{value:.2f}")

    return parse_amount(str(value))


def coerce_confidence(value: Any, default: float = DEFAULT_NLU_CONFIDENCE) -> float:
    """Convert an extracted confidence into a float within [0, 1]."""
    if value is None or isinstance(value, bool):
        return default

    try:
        confidence = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Non-numeric confidence {value!r}, using {default}")
        return default

    if math.isnan(confidence):
        return default

    return min(max(confidence, 0.0), 1.0)
