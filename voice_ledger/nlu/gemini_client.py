"""Google Gemini text generation over HTTPS."""
import logging
from typing import Optional

import httpx

from .base_client import BaseNLUClient, NLUError, MalformedResponseError

logger = logging.getLogger(__name__)


class GeminiClient(BaseNLUClient):
    """
    Call the Gemini generateContent endpoint with a single text prompt.

    The response envelope is candidates[0].content.parts[0].text.
    An httpx.AsyncClient can be injected (tests pass one backed by
    httpx.MockTransport); otherwise a client is opened per call.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key
            model: Model name
            base_url: API base URL
            timeout: Request timeout in seconds
            http_client: Optional shared async HTTP client
        """
        super().__init__(timeout=timeout)

        if not api_key:
            raise ValueError(
                "Gemini API key required. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter"
            )

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip('/')
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        """Full generateContent URL for the configured model."""
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, prompt: str) -> str:
        """Send prompt to Gemini and return the first candidate's text."""
        payload = {
            "contents": [{
                "parts": [{"text": prompt}]
            }]
        }

        try:
            if self._http_client is not None:
                response = await self._post(self._http_client, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, payload)
        except httpx.TimeoutException as e:
            raise NLUError(f"Gemini request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise NLUError(f"Gemini request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            raise NLUError(f"Gemini returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError("Gemini response is not JSON") from e

        return self._candidate_text(body)

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        logger.debug(f"POST {self.endpoint}")
        return await client.post(
            self.endpoint,
            params={"key": self.api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    @staticmethod
    def _candidate_text(body) -> str:
        """Pull candidates[0].content.parts[0].text out of the envelope."""
        if not isinstance(body, dict):
            raise MalformedResponseError("Gemini response envelope is not an object")

        candidates = body.get("candidates")
        if not candidates:
            raise MalformedResponseError("No candidates in Gemini response")

        try:
            text = candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise MalformedResponseError("Gemini candidate has no text part") from e

        if not isinstance(text, str) or not text.strip():
            raise MalformedResponseError("Gemini candidate text is empty")

        return text
