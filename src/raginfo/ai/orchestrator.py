"""Question answering over document chunks with a fallback model."""

import logging

from raginfo.ai.prompt import build_prompt, resolve_model
from raginfo.constants import FALLBACK_MODEL
from raginfo.errors import GenerationError
from raginfo.protocols import TextGenerator

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    """Answer a question from context chunks.

    The primary model gets one attempt. If it fails, the fallback model gets
    exactly one more; if that fails too, GenerationError is raised.
    """

    def __init__(self, generator: TextGenerator, fallback_model: str = FALLBACK_MODEL):
        self.generator = generator
        self.fallback_model = fallback_model

    def answer(
        self,
        query: str,
        context_chunks: list[str],
        model_id: str,
        api_key: str,
    ) -> str:
        """Generate an answer to query grounded in context_chunks.

        Args:
            query: The user's question
            context_chunks: Chunks concatenated into the prompt's context block
            model_id: Model selected in settings
            api_key: Provider API key

        Returns:
            The generated answer

        Raises:
            ValueError: if query is blank
            GenerationError: if both the primary and fallback attempts fail
        """
        if not query.strip():
            raise ValueError("query must not be empty")

        prompt = build_prompt(query, context_chunks)
        primary = resolve_model(model_id)

        try:
            return self.generator.generate(prompt, primary, api_key)
        except Exception as e:
            if primary == self.fallback_model:
                raise GenerationError(f"{primary} failed: {e}") from e
            logger.warning(f"{primary} failed ({e}); retrying with {self.fallback_model}")

        try:
            return self.generator.generate(prompt, self.fallback_model, api_key)
        except Exception as e:
            raise GenerationError(f"Fallback model {self.fallback_model} failed: {e}") from e
