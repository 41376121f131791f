from __future__ import annotations

from typing import Any

import pytest

from core.domain.errors import RemoteCallError


class FakeCacheClient:
    """In-memory `CacheApiClient` that records every call."""

    def __init__(self, responses: list[dict[str, Any]] | None = None, fail_with: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._responses = list(responses or [])
        self._fail_with = fail_with

    async def call(self, operation: str, params: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((operation, params))
        if self._fail_with is not None:
            raise self._fail_with
        if self._responses:
            return self._responses.pop(0)
        return {"RequestId": f"req-{len(self.calls)}"}


class RecordingReporter:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.outputs: dict[str, str] = {}
        self.failed: str | None = None

    def start_group(self, title: str) -> None:
        self.events.append(("group", title))

    def end_group(self) -> None:
        self.events.append(("endgroup", ""))

    def info(self, message: str) -> None:
        self.events.append(("info", message))

    def warning(self, message: str) -> None:
        self.events.append(("warning", message))

    def error(self, message: str) -> None:
        self.events.append(("error", message))

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value

    def set_failed(self, message: str) -> None:
        self.failed = message


@pytest.fixture
def generic_client() -> FakeCacheClient:
    return FakeCacheClient()


@pytest.fixture
def zoned_client() -> FakeCacheClient:
    return FakeCacheClient()


@pytest.fixture
def failing_client() -> FakeCacheClient:
    return FakeCacheClient(fail_with=RemoteCallError("denied", code="AuthFailure", request_id="req-x"))


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("INPUT_SECRET_ID", "INPUT_SECRET_KEY", "INPUT_ACTION", "INPUT_PATHS", "INPUT_REGION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    # AppSettings also reads ./.env
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_client():
    return FakeCacheClient
