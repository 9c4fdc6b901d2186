"""Base NLU client abstract class."""
from abc import ABC, abstractmethod


class BaseNLUClient(ABC):
    """
    Abstract base class for remote natural-language-understanding services.

    Every provider takes a prompt and returns the generated text. Failures
    of any kind are raised as NLUError so the interpreter can fall back.
    """

    def __init__(self, timeout: float = 10.0):
        """
        Initialize the client.

        Args:
            timeout: Request timeout in seconds
        """
        self.name = self.__class__.__name__
        self.timeout = timeout

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the generated text.

        Args:
            prompt: Complete extraction prompt

        Returns:
            Raw text produced by the service

        Raises:
            NLUError: If the call fails or times out
            MalformedResponseError: If the response has no usable text
        """
        pass


class NLUError(Exception):
    """Remote NLU call failed (network error, timeout, non-2xx status)."""
    pass


class MalformedResponseError(NLUError):
    """Remote NLU answered but the payload could not be used."""
    pass
