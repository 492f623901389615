import io
from collections.abc import Callable
from pathlib import Path

import pytest
import requests

from ampexport.constants import API_KEY_ENV, CONFIG_ENV, SECRET_KEY_ENV
from ampexport.export.credentials import Credentials

ZIP_BODY = b"PK\x03\x04fake-export-bundle\x00\x01\x02"


def make_response(
    status_code: int = 200,
    body: bytes = ZIP_BODY,
    content_type: str = "application/zip",
) -> requests.Response:
    """Build a real Response whose body streams from memory, standing in for the export endpoint."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.raw = io.BytesIO(body)
    resp.headers["Content-Type"] = content_type
    return resp


@pytest.fixture
def response_factory() -> Callable[..., requests.Response]:
    return make_response


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key="test-api-key", secret_key="test-secret-key")


@pytest.fixture
def credential_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(API_KEY_ENV, "test-api-key")
    monkeypatch.setenv(SECRET_KEY_ENV, "test-secret-key")


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory with no config file discovery."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    return tmp_path
