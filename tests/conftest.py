import json
import logging
import os
import socket
import sys
import urllib.request
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"
FIXTURES = Path(__file__).resolve().parent / "fixtures"

# Prefer repo sources over any installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from municipal_assessments.config import Settings, reset_settings_cache  # noqa: E402
from municipal_assessments.schema.records import (  # noqa: E402
    BuildingInfo,
    NeighbourhoodInfo,
    PropertyAssessment,
)


@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    if os.getenv("LIVE") == "1":
        return

    real_connect = socket.socket.connect

    def guarded_connect(sock, address):
        host = address[0]
        if host not in ("127.0.0.1", "localhost"):
            raise RuntimeError("Network access blocked in tests")
        return real_connect(sock, address)

    monkeypatch.setattr(socket.socket, "connect", guarded_connect)
    monkeypatch.setattr(
        urllib.request,
        "urlopen",
        lambda *args, **kwargs: (_ for _ in ()).throw(
            RuntimeError("Network access blocked in tests")
        ),
    )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in list(os.environ):
        if name.startswith("MA_"):
            monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("ma")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_csv():
    return FIXTURES / "assessments_sample.csv"


@pytest.fixture
def api_page():
    return json.loads((FIXTURES / "api_page.json").read_text(encoding="utf-8"))


@pytest.fixture
def settings():
    return Settings(api_url="https://example.invalid/resource/test.json", page_size=50)


def make_record(account_number, assessed_value=0, **building):
    return PropertyAssessment(
        building=BuildingInfo(account_number=account_number, **building),
        neighbourhood=NeighbourhoodInfo(assessed_value=assessed_value),
    )


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; replays queued responses in order."""

    def __init__(self, responses=None):
        self.headers = {}
        self.responses = list(responses or [])
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append({"url": url, "timeout": timeout})
        if not self.responses:
            return FakeResponse([])
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt

    def close(self):
        self.closed = True
