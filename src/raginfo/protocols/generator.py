"""Protocol for generative model providers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for generative model providers.

    Allows swapping the hosted Gemini client for a local model or a test fake.
    """

    def generate(self, prompt: str, model: str, api_key: str) -> str:
        """Return generated text for prompt, or raise on failure."""
        ...
