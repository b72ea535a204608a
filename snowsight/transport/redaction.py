from __future__ import annotations

import re
from typing import Mapping

from snowsight.config import LOGIN_PATH_PREFIXES

PASSWORD_MASK = '"PASSWORD":"****"'

# `"PASSWORD": "<value>"` in any case. The value may contain escaped quotes; when no
# closing quote is found on the line, the rest of the line is masked.
_PASSWORD_RE = re.compile(r'"PASSWORD"\s*:\s*"(?:(?:[^"\\\n]|\\[^\n])*"|[^\n]*)', re.IGNORECASE)

_TOKEN_RE = re.compile(r'Token="[^"]*"')


def is_login_path(path: str) -> bool:
    return (path or "").lstrip("/").startswith(LOGIN_PATH_PREFIXES)


def redact_body(path: str, body: str) -> str:
    """
    Copy of `body` that is safe to log.

    Only login requests carry a password; other bodies are returned as-is.
    """
    if not body or not is_login_path(path):
        return body or ""
    return _PASSWORD_RE.sub(PASSWORD_MASK, body)


def redact_headers(headers: Mapping[str, str]) -> str:
    """Render request headers one per line, masking the classic UI token."""
    lines = []
    for k, v in headers.items():
        if k.lower() == "authorization":
            v = _TOKEN_RE.sub('Token="****"', v)
        lines.append(f"{k}: {v}")
    return "\n".join(lines)
