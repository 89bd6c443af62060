"""
Pytest configuration and fixtures
"""
import os

import pytest

# The service module wires its adapter at import time; never reach a real model from tests
os.environ["LLM_ADAPTER"] = "mock"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("ANTHROPIC_API_KEY", None)

from llm_arena.orchestrator.dispatcher import ClassificationRuntime
from llm_arena.services.status_store import ResultStore


@pytest.fixture
def store() -> ResultStore:
    return ResultStore()


@pytest.fixture
def runtime():
    rt = ClassificationRuntime()
    rt.start()
    yield rt
    rt.stop()
