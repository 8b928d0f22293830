"""Shared pytest configuration and fixtures for raginfo tests."""

import pytest

from raginfo.ai import QueryOrchestrator
from raginfo.session import Session
from raginfo.storage import MemoryPort, StateStore


class FakeGenerator:
    """Records every call; fails for models listed in ``failing``."""

    def __init__(self, answer: str = "generated answer", failing: tuple[str, ...] = ()):
        self.answer = answer
        self.failing = set(failing)
        self.calls: list[tuple[str, str, str]] = []

    def generate(self, prompt: str, model: str, api_key: str) -> str:
        self.calls.append((prompt, model, api_key))
        if model in self.failing:
            raise RuntimeError(f"{model} is unavailable")
        return self.answer


@pytest.fixture
def port() -> MemoryPort:
    """Empty in-memory persistence port."""
    return MemoryPort()


@pytest.fixture
def store(port: MemoryPort) -> StateStore:
    """State store writing to the in-memory port."""
    return StateStore(port)


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def session(store: StateStore, generator: FakeGenerator) -> Session:
    """Session over an empty store with a fake generator."""
    return Session(store, QueryOrchestrator(generator))


@pytest.fixture
def sample_text() -> str:
    """A few paragraphs of prose with clear sentence boundaries."""
    return (
        "The quarterly report covers revenue and expenses. Revenue grew by "
        "fifteen percent compared to the previous quarter. Expenses rose by "
        "eight percent, mostly due to hiring. Is the growth sustainable? "
        "Management expects similar trends to continue!\n\n"
        "The second section discusses hiring plans. Ten engineers joined the "
        "platform team. Five more positions remain open. Recruiting will "
        "focus on senior roles next quarter."
    )
