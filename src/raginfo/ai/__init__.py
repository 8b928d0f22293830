"""Generative AI collaborators: prompt building, generators and retries."""

from raginfo.ai.orchestrator import QueryOrchestrator
from raginfo.ai.prompt import build_prompt, resolve_model

__all__ = ["QueryOrchestrator", "build_prompt", "resolve_model"]
