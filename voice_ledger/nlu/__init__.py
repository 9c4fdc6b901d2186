"""Remote natural-language-understanding clients."""
import logging
from typing import Optional

from ..config import settings
from .base_client import BaseNLUClient, NLUError, MalformedResponseError
from .gemini_client import GeminiClient
from .anthropic_client import AnthropicClient
from .openai_client import OpenAIClient

logger = logging.getLogger(__name__)

PROVIDERS = ('gemini', 'anthropic', 'openai', 'none')


def get_nlu_client(provider: Optional[str] = None) -> Optional[BaseNLUClient]:
    """
    Build the configured NLU client.

    Args:
        provider: Provider name (defaults to NLU_PROVIDER setting)

    Returns:
        Client instance, or None when the provider is "none" or its API key
        is missing (the interpreter then runs offline)
    """
    provider = (provider or settings.NLU_PROVIDER).lower()

    if provider == 'none':
        return None

    if provider == 'gemini':
        if not settings.GEMINI_API_KEY:
            logger.info("GEMINI_API_KEY not set, using offline interpretation")
            return None
        return GeminiClient(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_API_URL,
            timeout=settings.NLU_TIMEOUT_SECONDS
        )

    if provider == 'anthropic':
        if not settings.ANTHROPIC_API_KEY:
            logger.info("ANTHROPIC_API_KEY not set, using offline interpretation")
            return None
        return AnthropicClient(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.ANTHROPIC_MODEL,
            timeout=settings.NLU_TIMEOUT_SECONDS
        )

    if provider == 'openai':
        if not settings.OPENAI_API_KEY:
            logger.info("OPENAI_API_KEY not set, using offline interpretation")
            return None
        return OpenAIClient(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            timeout=settings.NLU_TIMEOUT_SECONDS
        )

    raise ValueError(f"Unsupported NLU provider: {provider}. Choose from {', '.join(PROVIDERS)}")


__all__ = [
    'BaseNLUClient',
    'NLUError',
    'MalformedResponseError',
    'GeminiClient',
    'AnthropicClient',
    'OpenAIClient',
    'PROVIDERS',
    'get_nlu_client',
]
