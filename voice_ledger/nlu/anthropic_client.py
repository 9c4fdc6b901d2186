"""Anthropic Claude text generation."""
import logging
from typing import Optional

try:
    import anthropic
except ImportError:
    anthropic = None

from .base_client import BaseNLUClient, NLUError, MalformedResponseError

logger = logging.getLogger(__name__)


class AnthropicClient(BaseNLUClient):
    """Extract transactions with the Anthropic Messages API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-3-5-haiku-20241022",
        timeout: float = 10.0,
        client=None
    ):
        """
        Initialize Anthropic client.

        Args:
            api_key: Anthropic API key
            model: Model name
            timeout: Request timeout in seconds
            client: Optional pre-built anthropic.AsyncAnthropic instance
        """
        super().__init__(timeout=timeout)
        self.model = model

        if client is not None:
            self.client = client
            return

        if anthropic is None:
            raise ImportError(
                "anthropic is required for the Anthropic provider. "
                "Install it with: pip install anthropic"
            )

        if not api_key:
            raise ValueError(
                "Anthropic API key required. Set ANTHROPIC_API_KEY environment variable "
                "or pass api_key parameter"
            )

        self.client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)

    async def generate(self, prompt: str) -> str:
        """Send prompt to Claude and return the concatenated text blocks."""
        logger.debug(f"Calling Anthropic model {self.model}")
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=300,
                temperature=0.0,
                messages=[{"role": "user", "content": prompt}]
            )
        except Exception as e:
            raise NLUError(f"Anthropic request failed: {e}") from e

        blocks = getattr(message, "content", None) or []
        text = "".join(
            getattr(block, "text", "") for block in blocks
            if getattr(block, "type", "text") == "text"
        )

        if not text.strip():
            raise MalformedResponseError("Anthropic response has no text content")

        return text.strip()
