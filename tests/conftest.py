"""
Pytest config.

Pins the repo root on sys.path so `import snowsight` works without an install,
and provides a fake HTTP layer: `requests.Session.request` is replaced, so no
test ever opens a socket.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()


def make_response(
    status: int = 200,
    text: str = "",
    *,
    reason: str = "OK",
    set_cookies: Sequence[str] = (),
    content_type: Optional[str] = None,
    content: Optional[bytes] = None,
):
    """
    Build a real `requests.Response` with individually addressable Set-Cookie headers.

    The encoding is derived from the headers the way the requests HTTP adapter does it.
    """
    import requests
    from requests.structures import CaseInsensitiveDict
    from requests.utils import get_encoding_from_headers
    from urllib3 import HTTPHeaderDict

    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp._content = content if content is not None else text.encode("utf-8")
    raw_headers = HTTPHeaderDict()
    for c in set_cookies:
        raw_headers.add("Set-Cookie", c)
    headers = {"Set-Cookie": ", ".join(set_cookies)} if set_cookies else {}
    if content_type:
        headers["Content-Type"] = content_type
    resp.headers = CaseInsensitiveDict(headers)
    resp.encoding = get_encoding_from_headers(resp.headers)
    resp.raw = SimpleNamespace(headers=raw_headers)
    return resp


class FakeHttp:
    def __init__(self) -> None:
        self.response = make_response(200, "")
        self.error: Optional[BaseException] = None
        self.calls: List[Dict[str, Any]] = []

    def respond(self, status: int = 200, text: str = "", **kwargs: Any) -> None:
        self.response = make_response(status, text, **kwargs)

    @property
    def last(self) -> Dict[str, Any]:
        assert self.calls, "no request was made"
        return self.calls[-1]


@pytest.fixture
def fake_http(monkeypatch: pytest.MonkeyPatch) -> FakeHttp:
    import requests

    fake = FakeHttp()

    def _fake_request(session, method, url, **kwargs):  # type: ignore[no-untyped-def]
        fake.calls.append(
            {
                "method": method,
                "url": url,
                "kwargs": kwargs,
                "headers": dict(session.headers),
                "cookies": list(session.cookies),
                "verify": session.verify,
            }
        )
        if fake.error is not None:
            raise fake.error
        return fake.response

    monkeypatch.setattr(requests.Session, "request", _fake_request)
    return fake


@pytest.fixture(autouse=True)
def _reset_config_and_loggers():
    """Config is cached per process and the CLI rewires the console logger; undo both."""
    from snowsight.config import load_config
    from snowsight.transport.telemetry import CONSOLE_LOGGER_NAME

    load_config.cache_clear()
    yield
    load_config.cache_clear()
    console = logging.getLogger(CONSOLE_LOGGER_NAME)
    for h in list(console.handlers):
        console.removeHandler(h)
    console.propagate = True
    console.setLevel(logging.NOTSET)
