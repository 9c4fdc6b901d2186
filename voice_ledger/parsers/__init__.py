"""Parsers turning transcripts and NLU output into transactions."""
from .heuristic_parser import HeuristicParser
from .response_parser import (
    extract_json_object,
    parse_nlu_response,
    coerce_amount,
    coerce_confidence
)

__all__ = [
    'HeuristicParser',
    'extract_json_object',
    'parse_nlu_response',
    'coerce_amount',
    'coerce_confidence'
]
