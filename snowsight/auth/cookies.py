"""
Session cookie parsing.

Snowsight login returns its session as the literal value of a `Set-Cookie` header:

    user-6f64...25=CFBr...xw==; Path=/; Expires=Wed, 12 May 2021 02:18:33 GMT; Max-Age=2419200; HttpOnly; Secure; SameSite=Lax

Callers keep that string and hand it back on every call; it is turned into a cookie
bound to the host being called.
"""

from __future__ import annotations

from datetime import datetime, timezone
from http.cookiejar import Cookie
from typing import Optional

from dateutil import parser as date_parser
from requests.cookies import create_cookie

from snowsight.auth.models import SessionCookie
from snowsight.config import SESSION_TOKEN_PREFIX


class InvalidSessionTokenError(ValueError):
    """The token string does not carry a `user-...` session cookie."""


def _parse_expires(value: str) -> Optional[datetime]:
    try:
        dt = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_session_cookie(raw_token: str, target_domain: str) -> SessionCookie:
    """
    Parse a raw cookie-attribute string into a SessionCookie for `target_domain`.

    Segments are `;`-separated and order-independent. Unknown attributes
    (Max-Age, SameSite, ...) are ignored. The cookie value is everything after
    the first `=`, so base64 padding survives.

    Raises:
        InvalidSessionTokenError if no `user-` segment is present.
    """
    name: Optional[str] = None
    value = ""
    path = "/"
    expires = None
    http_only = False
    secure = False

    for segment in (raw_token or "").split(";"):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, rest = segment.partition("=")
        key = key.strip()
        if not sep:
            flag = key.lower()
            if flag == "httponly":
                http_only = True
            elif flag == "secure":
                secure = True
            continue

        attr = key.lower()
        if attr == "path":
            path = rest.strip() or "/"
        elif attr == "expires":
            expires = _parse_expires(rest.strip())
        elif key.startswith(SESSION_TOKEN_PREFIX):
            name = key
            value = rest

    if not name:
        raise InvalidSessionTokenError("No cookie name was found in the authentication token")

    # Domain always comes from the host being called.
    return SessionCookie(
        name=name,
        value=value,
        domain=target_domain,
        path=path,
        expires=expires,
        http_only=http_only,
        secure=secure,
    )


def to_jar_cookie(cookie: SessionCookie) -> Cookie:
    """Convert to a cookie that a requests cookie jar can send."""
    rest = {"HttpOnly": None} if cookie.http_only else {}
    return create_cookie(
        name=cookie.name,
        value=cookie.value,
        domain=cookie.domain,
        path=cookie.path,
        expires=int(cookie.expires.timestamp()) if cookie.expires else None,
        secure=cookie.secure,
        rest=rest,
    )
