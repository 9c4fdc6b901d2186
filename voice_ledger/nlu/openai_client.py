"""OpenAI chat completion text generation."""
import logging
from typing import Optional

try:
    import openai
except ImportError:
    openai = None

from .base_client import BaseNLUClient, NLUError, MalformedResponseError

logger = logging.getLogger(__name__)


class OpenAIClient(BaseNLUClient):
    """Extract transactions with OpenAI chat completions in JSON mode."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: float = 10.0,
        client=None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key
            model: Model name
            timeout: Request timeout in seconds
            client: Optional pre-built openai.AsyncOpenAI instance
        """
        super().__init__(timeout=timeout)
        self.model = model

        if client is not None:
            self.client = client
            return

        if openai is None:
            raise ImportError(
                "openai is required for the OpenAI provider. "
                "Install it with: pip install openai"
            )

        if not api_key:
            raise ValueError(
                "OpenAI API key required. Set OPENAI_API_KEY environment variable "
                "or pass api_key parameter"
            )

        self.client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def generate(self, prompt: str) -> str:
        """Send prompt to OpenAI and return the first choice's message."""
        logger.debug(f"Calling OpenAI model {self.model}")
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=300,
                temperature=0.0,
                response_format={"type": "json_object"}
            )
        except Exception as e:
            raise NLUError(f"OpenAI request failed: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise MalformedResponseError("OpenAI response has no choices") from e

        if not content or not content.strip():
            raise MalformedResponseError("OpenAI response content is empty")

        return content.strip()
