"""Shared fixtures: an isolated environment and canned HTTP responses."""

import json
from unittest.mock import Mock

import pytest
import requests

from ado_pipelines.config import AppConfig

_ENV_VARS = [
    "AZURE_DEVOPS_PAT",
    "SHELL",
    "ADO_BASE_URL",
    "ADO_API_VERSION",
    "ADO_REQUEST_TIMEOUT",
    "ADO_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's real PAT and shell out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def home(tmp_path):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


@pytest.fixture
def config(home):
    return AppConfig(shell="/bin/bash", home_dir=str(home))


@pytest.fixture
def make_response():
    """Build a real requests.Response without touching the network."""

    def _make(status_code=200, body=None, reason="OK", headers=None):
        response = requests.Response()
        response.status_code = status_code
        response.reason = reason
        response.url = "https://dev.azure.com/org/proj/_apis/pipelines?api-version=7.0"
        if body is None:
            response._content = b""
        elif isinstance(body, (bytes, str)):
            response._content = body.encode() if isinstance(body, str) else body
        else:
            response._content = json.dumps(body).encode()
            response.headers["Content-Type"] = "application/json; charset=utf-8"
        response.headers.update(headers or {})
        response.encoding = "utf-8"
        return response

    return _make


@pytest.fixture
def session():
    return Mock(spec=requests.Session)
