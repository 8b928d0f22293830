"""Prompt construction for document question answering."""

from raginfo.constants import DEFAULT_MODEL

CONTEXT_SEPARATOR = "\n---\n"


def build_prompt(query: str, context_chunks: list[str]) -> str:
    """Build the answer prompt with every context chunk in one block."""
    context = CONTEXT_SEPARATOR.join(context_chunks)
    return (
        "You are a helpful AI assistant that answers questions based on the "
        "provided document excerpts.\n\n"
        "Use the following document excerpts as context to answer the question. "
        'If the answer is not found in the excerpts, say "I could not find an '
        'answer in the provided documents." Do not make up information.\n\n'
        "Context:\n"
        "---\n"
        f"{context}\n\n"
        f"Question: {query}"
    )


def resolve_model(model_id: str) -> str:
    """Map a settings model id to a Gemini model name."""
    return model_id if model_id.startswith("gemini") else DEFAULT_MODEL
