"""Fixtures shared by the restnav test suite.

``http`` is the in-memory client most engine tests run against;
``isolated_config`` keeps config and crash logs inside ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest

from restnav.models import Profile, RequestConfig
from restnav.output import reset_output


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the installed OutputManager, which holds the streams of its test."""
    yield
    reset_output()


# ---------------------------------------------------------------------------
# HTTP double
# ---------------------------------------------------------------------------


class RecordingClient:
    """In-memory stand-in for :class:`~restnav.client.HttpClient`.

    Responses are registered per ``(method, path)``. A registered exception
    is raised instead of returned. Every call is appended to :attr:`calls`
    as ``(method, path, params)`` so tests can count requests.
    """

    def __init__(self, responses: Optional[dict[tuple[str, str], Any]] = None) -> None:
        self.responses: dict[tuple[str, str], Any] = dict(responses or {})
        self.calls: list[tuple[str, str, Optional[dict[str, Any]]]] = []

    def add(self, method: str, path: str, response: Any) -> None:
        self.responses[(method, path)] = response

    def count(self, method: Optional[str] = None) -> int:
        return sum(1 for call in self.calls if method is None or call[0] == method)

    def _answer(self, method: str, path: str, params: Optional[dict[str, Any]]) -> Any:
        self.calls.append((method, path, params))
        try:
            response = self.responses[(method, path)]
        except KeyError:
            raise AssertionError(f"Unexpected request: {method} {path}") from None
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, path: str, params: Optional[dict[str, Any]] = None, absolute: bool = False) -> Any:
        return self._answer("GET", path, params)

    def post(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return self._answer("POST", path, params)

    def delete(self, path: str) -> Any:
        return self._answer("DELETE", path, None)


@pytest.fixture
def http() -> RecordingClient:
    """A fresh :class:`RecordingClient` with no responses registered."""
    return RecordingClient()


# ---------------------------------------------------------------------------
# Profile fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_profile() -> Profile:
    """A profile pointing at a local API with token auth from the environment."""
    return Profile(
        name="test-api",
        base_url="http://localhost:8080",
        account_sid="AC123",
        auth_token_source="env:TEST_AUTH_TOKEN",
        request=RequestConfig(timeout=5, verify_ssl=False),
    )


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path
    so that tests never touch real user config. Clears all RESTNAV_*
    environment variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("restnav.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["RESTNAV_PROFILE", "RESTNAV_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path

