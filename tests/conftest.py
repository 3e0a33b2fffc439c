"""Shared fixtures: a sample game and a stand-in for the remote model."""
import pytest

from courtside.services import schedule_service


class StubModel:
    """Records grounded_completion calls and replays a canned response."""

    def __init__(self, text: str = "", chunks=None, error: Exception | None = None):
        self.text = text
        self.chunks = chunks or []
        self.error = error
        self.calls = []

    async def __call__(self, prompt, instructions=None, model=None):
        self.calls.append({"prompt": prompt, "instructions": instructions, "model": model})
        if self.error:
            raise self.error
        return {"text": self.text, "grounding_chunks": self.chunks}


@pytest.fixture
def game():
    return {
        "id": "GSW-LAL-20261017",
        "homeTeam": "Los Angeles Lakers",
        "awayTeam": "Golden State Warriors",
        "time": "7:30 PM ET",
        "date": "Oct 17",
    }


@pytest.fixture
def stub_model():
    return StubModel


@pytest.fixture(autouse=True)
def _clear_schedule_cache():
    schedule_service.clear_cache()
    yield
    schedule_service.clear_cache()
