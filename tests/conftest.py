"""
Module: conftest.py
Description: Shared pytest fixtures for speaker notify tests.

Provides sample payloads, delivery inputs, a recording reporter and a
fake sleep so retry tests run instantly, plus an isolated environment
for tests that load settings from INPUT_* / GITHUB_* variables.
"""

from typing import Any, Dict, List, Tuple

import pytest

from speaker_notify.models import PayloadMetadata, RetryConfig, WebhookPayload

ACTION_ENV_VARS = (
    "INPUT_WEBHOOK_URL",
    "INPUT_API_SECRET",
    "INPUT_CF_CLIENT_ID",
    "INPUT_CF_CLIENT_SECRET",
    "INPUT_MESSAGE",
    "INPUT_SUCCESS_MESSAGE",
    "INPUT_FAILURE_MESSAGE",
    "INPUT_JOB_STATUS",
    "INPUT_CUSTOM_PAYLOAD",
    "INPUT_TIMEOUT",
    "INPUT_MAX_RETRIES",
    "INPUT_INCLUDE_OWNER",
    "GITHUB_REPOSITORY",
    "GITHUB_WORKFLOW",
    "GITHUB_OUTPUT",
)


class RecordingReporter:
    """Reporter test double that keeps every notice it receives."""

    def __init__(self):
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []

    def debug(self, event: str, **kw: Any) -> None:
        self.records.append(("debug", event, kw))

    def info(self, event: str, **kw: Any) -> None:
        self.records.append(("info", event, kw))

    def warning(self, event: str, **kw: Any) -> None:
        self.records.append(("warning", event, kw))

    def events(self, level: str) -> List[str]:
        return [event for lvl, event, _ in self.records if lvl == level]


class FakeSleep:
    """Async sleep replacement that records requested delays in seconds."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def test_url():
    return "https://example.com"


@pytest.fixture
def sample_payload():
    """
    Provide a typical payload for delivery tests.

    Mirrors what the action builds for a successful CI run.
    """
    return WebhookPayload(
        message="Test message",
        metadata=PayloadMetadata(repository="testrepo", workflow="CI"),
    )


@pytest.fixture
def sample_response_body():
    return {
        "status": "processed",
        "message": "Test message",
        "notification_sent": True,
    }


@pytest.fixture
def retry_config():
    """Two retries with the default 1s backoff base."""
    return RetryConfig(max_retries=2, timeout_ms=10000)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def action_env(monkeypatch, tmp_path):
    """
    Provide an isolated runner environment.

    Clears every variable the action reads, then sets the minimum a
    workflow run would have. Returns the GITHUB_OUTPUT file path.
    """
    for name in ACTION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    output_file = tmp_path / "github_output"
    output_file.touch()

    monkeypatch.setenv("INPUT_WEBHOOK_URL", "https://speaker.example.com/")
    monkeypatch.setenv("GITHUB_REPOSITORY", "testowner/testrepo")
    monkeypatch.setenv("GITHUB_WORKFLOW", "CI")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output_file))

    return output_file


def _parse_outputs(path) -> Dict[str, str]:
    """Parse a GITHUB_OUTPUT file written in the delimiter form."""
    outputs: Dict[str, str] = {}
    lines = path.read_text(encoding="utf-8").splitlines()
    i = 0
    while i < len(lines):
        name, delimiter = lines[i].split("<<", 1)
        value_lines = []
        i += 1
        while lines[i] != delimiter:
            value_lines.append(lines[i])
            i += 1
        outputs[name] = "\n".join(value_lines)
        i += 1
    return outputs


@pytest.fixture
def read_outputs():
    return _parse_outputs
