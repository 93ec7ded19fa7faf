"""Pytest configuration and shared fixtures."""
import pytest
from fastapi.testclient import TestClient

from learnpath.agents import roadmap_graph
from learnpath.agents.llm.base import LLMClient, PlannerError
from learnpath.agents.llm.client import get_llm_client
from learnpath.main import app
from learnpath.roadmaps.store import RoadmapSessionStore, get_store


TWO_LEVEL_ROADMAP = "## Beginner\n- Learn X\n## Advanced\n- Learn Y"

THREE_LEVEL_ROADMAP = """\
# Python Roadmap

## Beginner
1. Install Python
2. Variables and types

## Intermediate
- Functions
- Modules

### Advanced
- Decorators
- Generators
"""


class StubLLM(LLMClient):
    """Returns a fixed document and records every call."""

    def __init__(self, response: str):
        self.response = response
        self.calls = []

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        self.calls.append({"system": system, "user": user, "temperature": temperature})
        return self.response


class FailingLLM(LLMClient):
    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        raise PlannerError("service unavailable")


@pytest.fixture
def stub_llm():
    return StubLLM(TWO_LEVEL_ROADMAP)


@pytest.fixture
def two_module_state(stub_llm):
    return roadmap_graph.initialize("Python", llm=stub_llm)


@pytest.fixture
def three_module_state():
    return roadmap_graph.initialize("Python", "Backend track", llm=StubLLM(THREE_LEVEL_ROADMAP))


@pytest.fixture
def session_store():
    return RoadmapSessionStore()


@pytest.fixture
def client(session_store):
    """Test client whose planner returns the three-level roadmap."""
    llm = StubLLM(THREE_LEVEL_ROADMAP)
    app.dependency_overrides[get_llm_client] = lambda: llm
    app.dependency_overrides[get_store] = lambda: session_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(session_store):
    app.dependency_overrides[get_llm_client] = lambda: FailingLLM()
    app.dependency_overrides[get_store] = lambda: session_store
    yield TestClient(app)
    app.dependency_overrides.clear()
