"""Gemini-backed text generator."""

import logging

import google.generativeai as genai

from raginfo.errors import GenerationError

logger = logging.getLogger(__name__)


class GeminiGenerator:
    """Text generator using the google-generativeai client.

    The API key comes from the user's settings on every call.
    """

    def generate(self, prompt: str, model: str, api_key: str) -> str:
        """Generate a completion for prompt with the given model.

        Raises:
            GenerationError: if Gemini returns no text
        """
        genai.configure(api_key=api_key)
        response = genai.GenerativeModel(model).generate_content(prompt)

        if not response.text:
            raise GenerationError(f"{model} returned an empty response")

        logger.debug(f"{model} answered with {len(response.text)} characters")
        return response.text
