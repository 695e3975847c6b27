"""Shared test doubles: a scripted random source and a fake OpenAI client."""

from types import SimpleNamespace

import pytest


class ScriptedRandom:
    """Random source that returns a fixed sequence of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        self.calls += 1
        return self.values.pop(0)


def make_tool_call(name, arguments):
    return SimpleNamespace(
        id="call_1",
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


def make_completion(content=None, tool_calls=None):
    message = SimpleNamespace(role="assistant", content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:
    """Mimics ``OpenAI().chat.completions.create``."""

    def __init__(self, response=None, error=None):
        self.completions = FakeCompletions(response=response, error=error)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def requests(self):
        return self.completions.requests


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def completion():
    return make_completion


@pytest.fixture
def tool_call():
    return make_tool_call


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's environment out of settings-driven tests."""
    for name in (
        "OPENAI_API_KEY",
        "STORYTELLER_MODEL",
        "OPENAI_MAX_RETRIES",
        "PORT",
        "ALLOWED_ORIGINS",
        "INTERACTION_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
