"""
Transcript interpretation pipeline.

Turns a spoken transaction description into a ParsedTransaction:
1. Remote - ask the NLU service for strict JSON and validate it
2. Fallback - keyword heuristics when the remote path fails for any reason

interpret() never raises for a bad service; availability wins over accuracy.
"""
import asyncio
import logging
from typing import Optional

from .config.categories import INCOME_CATEGORIES, EXPENSE_CATEGORIES
from .config.settings import NLU_TIMEOUT_SECONDS
from .models import ParsedTransaction
from .nlu import BaseNLUClient
from .parsers import HeuristicParser, parse_nlu_response
from .utils import log_interpretation_audit

logger = logging.getLogger(__name__)


class TransactionInterpreter:
    """
    Interpret transcripts with a remote NLU client and a local fallback.

    The client is injected; pass None to run fully offline. The interpreter
    holds no per-call state, so one instance can serve concurrent calls.
    """

    EXTRACTION_PROMPT = """Analyze the following text and extract the financial transaction it describes.
The text is an informal spoken sentence in Indonesian or English.

Text: "{transcript}"

Extract:
1. type: "income" or "expense"
2. amount: amount of money as a number, without currency (expand words such as "ribu" = thousand, "juta" = million)
3. category: one category from this list
   - For income: {income_categories}
   - For expense: {expense_categories}
4. description: short description of the transaction
5. confidence: how confident you are in this extraction (0-1)

Example output:
{{
  "type": "expense",
  "amount": 25000,
  "category": "Food",
  "description": "Bought coffee",
  "confidence": 0.9
}}

Income keywords: terima, dapat, gaji, bonus, hadiah, untung, masuk, receive, get, salary
Expense keywords: beli, bayar, buat, keluar, habis, spend, buy, pay

Return ONLY the JSON object, no explanation."""

    def __init__(
        self,
        client: Optional[BaseNLUClient] = None,
        timeout: float = NLU_TIMEOUT_SECONDS,
        fallback: Optional[HeuristicParser] = None
    ):
        """
        Initialize interpreter.

        Args:
            client: Remote NLU client, or None for offline interpretation
            timeout: Upper bound in seconds for the remote call
            fallback: Heuristic parser (default keyword tables if None)
        """
        self.client = client
        self.timeout = timeout
        self.fallback = fallback or HeuristicParser()

    @property
    def is_online(self) -> bool:
        """Whether a remote NLU client is configured."""
        return self.client is not None

    def build_prompt(self, transcript: str) -> str:
        """Embed the transcript and category taxonomy into the extraction prompt."""
        return self.EXTRACTION_PROMPT.format(
            transcript=transcript.replace('"', "'"),
            income_categories=", ".join(INCOME_CATEGORIES),
            expense_categories=", ".join(EXPENSE_CATEGORIES),
        )

    async def interpret(self, transcript: str) -> ParsedTransaction:
        """
        Interpret a transcript.

        Args:
            transcript: Raw text from speech-to-text

        Returns:
            ParsedTransaction from the NLU service, or from the heuristic
            fallback when the service is disabled or fails
        """
        transcript = transcript if isinstance(transcript, str) else ""

        if not self.is_online:
            return self._fallback(transcript, reason="offline")

        if not transcript.strip():
            return self._fallback(transcript, reason="empty transcript")

        try:
            result = await asyncio.wait_for(
                self._interpret_remote(transcript),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"{self.client.name} timed out after {self.timeout}s, using fallback")
            return self._fallback(transcript, reason="timeout")
        except Exception as e:
            logger.warning(f"{self.client.name} interpretation failed ({type(e).__name__}: {e}), using fallback")
            return self._fallback(transcript, reason=type(e).__name__)

        self._audit(result, transcript)
        return result

    async def _interpret_remote(self, transcript: str) -> ParsedTransaction:
        prompt = self.build_prompt(transcript)
        logger.debug(f"Sending transcript ({len(transcript)} chars) to {self.client.name}")

        response_text = await self.client.generate(prompt)
        return parse_nlu_response(response_text)

    def _fallback(self, transcript: str, reason: str) -> ParsedTransaction:
        result = self.fallback.parse(transcript)
        self._audit(result, transcript, reason)
        return result

    @staticmethod
    def _audit(result: ParsedTransaction, transcript: str, reason: Optional[str] = None) -> None:
        log_interpretation_audit(
            source=result.source,
            transaction_type=result.type.value,
            category=result.category,
            amount=result.amount,
            confidence=result.confidence,
            transcript_length=len(transcript),
            fallback_reason=reason
        )

    def interpret_sync(self, transcript: str) -> ParsedTransaction:
        """Run interpret() for callers without an event loop."""
        return asyncio.run(self.interpret(transcript))


async def interpret_transcript(
    transcript: str,
    client: Optional[BaseNLUClient] = None,
    timeout: float = NLU_TIMEOUT_SECONDS
) -> ParsedTransaction:
    """Interpret one transcript with a throwaway interpreter."""
    return await TransactionInterpreter(client=client, timeout=timeout).interpret(transcript)
