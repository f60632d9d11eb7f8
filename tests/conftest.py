"""Shared pytest fixtures for all test modules."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from tests.mocks import FakeClient

GITHUB_ACTIONS_ENV = {
    "GITHUB_ACTIONS": "true",
    "GITHUB_HEAD_REF": "feature/cache",
    "GITHUB_REF": "refs/pull/42/merge",
    "GITHUB_REPOSITORY": "example/service",
    "GITHUB_RUN_ID": "1234567890",
    "GITHUB_SERVER_URL": "https://github.com",
    "GITHUB_SHA": "0123456789abcdef0123456789abcdef01234567",
    "GITHUB_WORKFLOW": "CI",
}


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a container engine")


@pytest.fixture
def fake_client() -> FakeClient:
    """Client that records container builder calls."""
    return FakeClient()


@pytest.fixture
def github_actions_env() -> Dict[str, str]:
    """Host environment of a GitHub Actions pull request run."""
    return dict(GITHUB_ACTIONS_ENV)


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a configuration dictionary to a JSON file and return its path."""

    def _write(cfg: Any, name: str = "goci.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(cfg), encoding="utf-8")
        return str(path)

    return _write
