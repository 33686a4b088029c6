"""Test fixtures for upload-echo-api unit tests."""

from dataclasses import dataclass, field

import pytest


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key.lower(), default)

    def set(self, key: str, value: str) -> None:
        self._data[key.lower()] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key.lower()] = value


@dataclass
class MockUrl:
    path: str = "/"


@dataclass
class MockRequest:
    """Mock multipart Request object for Robyn."""

    form_data: dict[str, str] = field(default_factory=dict)
    files: dict[str, bytes] = field(default_factory=dict)
    headers: MockHeaders = field(default_factory=MockHeaders)
    method: str = "POST"
    url: MockUrl = field(default_factory=MockUrl)


# -----------------------------------------------------------------------------
# Request factory
# -----------------------------------------------------------------------------


@pytest.fixture
def make_mock_request():
    """Factory fixture to create mock multipart requests."""

    def _make(
        form: dict[str, str] | None = None,
        files: dict[str, bytes] | None = None,
        headers: dict[str, str] | None = None,
        path: str = "/",
    ) -> MockRequest:
        return MockRequest(
            form_data=form or {},
            files=files or {},
            headers=MockHeaders({k.lower(): v for k, v in (headers or {}).items()}),
            url=MockUrl(path=path),
        )

    return _make
