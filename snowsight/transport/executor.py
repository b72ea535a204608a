"""
Authenticated request executor for the Snowsight app server and classic UI endpoints.

Every call builds its own `requests.Session`, attaches the credentials from an
`AuthenticationContext`, runs with a fixed timeout and never follows redirects.
Failures are absorbed: the caller gets a `RequestOutcome` (or, from the string
helpers, an empty string) and the details go to the logs.

TLS certificate validation is disabled. Accounts whose chain is not in the local
trust store still work, but there is no protection against an active attacker on
the network path.
"""

from __future__ import annotations

import base64
import json
import logging
import warnings
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional
from urllib.parse import urlparse

import requests
from urllib3.exceptions import InsecureRequestWarning

from snowsight.auth.cookies import InvalidSessionTokenError, parse_session_cookie, to_jar_cookie
from snowsight.auth.models import AuthenticationContext
from snowsight.config import OAUTH_COMPLETION_PREFIX, REQUEST_TIMEOUT_SECONDS, SESSION_TOKEN_PREFIX, USER_AGENT
from snowsight.transport import telemetry
from snowsight.transport.redaction import redact_body, redact_headers

OutcomeKind = Literal["ok", "auth_error", "http_error", "transport_error"]


@dataclass(frozen=True)
class RequestOutcome:
    kind: OutcomeKind
    status_code: Optional[int] = None
    reason: Optional[str] = None
    body: str = ""  # Response text; also kept for failed responses
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind == "ok"

    @property
    def text(self) -> str:
        """Body on success, empty string otherwise."""
        return self.body if self.ok else ""


def join_url(base_url: str, path: str) -> str:
    return f"{(base_url or '').rstrip('/')}/{(path or '').lstrip('/')}"


def _append_accept(headers: Dict[str, str], media_type: str) -> None:
    values = [v.strip() for v in headers.get("Accept", "").split(",") if v.strip()]
    if media_type and media_type not in values:
        values.append(media_type)
    if values:
        headers["Accept"] = ", ".join(values)


def build_headers(
    context: AuthenticationContext,
    accept: str,
    *,
    user_agent: str = USER_AGENT,
    include_role: bool = False,
) -> Dict[str, str]:
    """Request headers for `context`. The session cookie is attached separately."""
    headers: Dict[str, str] = {"User-Agent": user_agent}
    if context.referer:
        headers["Referer"] = context.referer
    if context.snowflake_context:
        headers["x-snowflake-context"] = context.snowflake_context
    if context.classic_token:
        headers["Authorization"] = f'Basic Snowflake Token="{context.classic_token}"'
    if include_role and context.role:
        headers["x-snowflake-role"] = context.role
    _append_accept(headers, accept)
    return headers


def set_cookie_values(response: requests.Response) -> List[str]:
    """Individual `Set-Cookie` header values (requests merges repeated headers)."""
    raw_headers = getattr(getattr(response, "raw", None), "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return list(raw_headers.getlist("Set-Cookie"))
    merged = response.headers.get("Set-Cookie")
    return [merged] if merged else []


def build_redirect_artifact(raw_cookie: str, page: str) -> str:
    encoded = base64.b64encode(page.encode("utf-8")).decode("ascii")
    return json.dumps({"authenticationCookie": raw_cookie, "resultPage": encoded})


def parse_redirect_artifact(text: str) -> Dict[str, str]:
    """
    Decode the OAuth completion result.

    Returns:
        Dict with:
          - authenticationCookie: raw `user-...` cookie string (a Snowsight token)
          - resultPage: the HTML page returned by the server, decoded
    """
    data = json.loads(text)
    if not isinstance(data, dict) or "authenticationCookie" not in data:
        raise ValueError("Not an OAuth completion result")
    page = base64.b64decode(str(data.get("resultPage") or "")).decode("utf-8")
    return {"authenticationCookie": str(data["authenticationCookie"]), "resultPage": page}


class RequestExecutor:
    """
    Executes GET/POST/DELETE calls against a Snowsight or classic UI host.

    Success is 2xx for every method; GET also accepts 302 Found, since the
    OAuth flow answers with a redirect whose headers carry the session.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        console_logger: Optional[logging.Logger] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        user_agent: str = USER_AGENT,
    ) -> None:
        self._logger = logger or telemetry.operator_logger()
        self._console = console_logger or telemetry.console_logger()
        self._timeout = timeout
        self._user_agent = user_agent

    def get(
        self, base_url: str, path: str, accept: str, context: Optional[AuthenticationContext] = None
    ) -> str:
        return self.execute("GET", base_url, path, accept, context).text

    def post(
        self,
        base_url: str,
        path: str,
        accept: str,
        body: str,
        content_type: str,
        context: Optional[AuthenticationContext] = None,
    ) -> str:
        return self.execute("POST", base_url, path, accept, context, body=body, content_type=content_type).text

    def delete(
        self, base_url: str, path: str, accept: str, context: Optional[AuthenticationContext] = None
    ) -> str:
        return self.execute("DELETE", base_url, path, accept, context).text

    def execute(
        self,
        method: str,
        base_url: str,
        path: str,
        accept: str,
        context: Optional[AuthenticationContext] = None,
        *,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> RequestOutcome:
        """
        Run one call and classify the response.

        Raises:
            InvalidSessionTokenError if the context carries a malformed Snowsight token.
        """
        method = method.upper()
        context = context or AuthenticationContext()
        url = join_url(base_url, path)
        logged_body = redact_body(path, body) if body is not None else None

        with telemetry.CallTimer(self._logger, method, url):
            try:
                with requests.Session() as session:
                    session.verify = False
                    session.headers.pop("Accept", None)
                    session.headers.update(
                        build_headers(
                            context, accept, user_agent=self._user_agent, include_role=(method == "GET")
                        )
                    )
                    if context.snowsight_token:
                        host = urlparse(base_url).hostname or ""
                        cookie = parse_session_cookie(context.snowsight_token, host)
                        session.cookies.set_cookie(to_jar_cookie(cookie))

                    kwargs: Dict[str, Any] = {"timeout": self._timeout, "allow_redirects": False}
                    if body is not None:
                        kwargs["data"] = body.encode("utf-8")
                        if content_type:
                            kwargs["headers"] = {"Content-Type": content_type}

                    with warnings.catch_warnings():
                        warnings.simplefilter("ignore", InsecureRequestWarning)
                        response = session.request(method, url, **kwargs)

                    request_headers = dict(session.headers)
                    if content_type and body is not None:
                        request_headers["Content-Type"] = content_type
                    return self._classify(method, url, path, response, request_headers, logged_body)
            except InvalidSessionTokenError:
                raise
            except Exception as e:
                return self._failed(method, url, e)

    def _is_success(self, method: str, status: int) -> bool:
        if 200 <= status < 300:
            return True
        return method == "GET" and status == 302

    def _classify(
        self,
        method: str,
        url: str,
        path: str,
        response: requests.Response,
        request_headers: Dict[str, str],
        logged_body: Optional[str],
    ) -> RequestOutcome:
        status = int(response.status_code)
        reason = response.reason or ""
        if "charset" not in (response.headers.get("Content-Type") or "").lower():
            # requests falls back to ISO-8859-1 for text/* without a charset; the servers send UTF-8.
            response.encoding = "utf-8"
        text = response.text or ""
        headers_text = redact_headers(request_headers)
        request_part = f"\nRequest:\n{logged_body}" if logged_body is not None else ""

        if self._is_success(method, status):
            self._logger.info(
                "%s %s returned %d (%s)\nRequest Headers:\n%s%s\nResponse Length %d",
                method,
                url,
                status,
                reason,
                headers_text,
                request_part,
                len(text),
            )
            self._logger.debug("%s %s response:\n%s", method, url, text)
            if method == "GET" and path.lstrip("/").startswith(OAUTH_COMPLETION_PREFIX):
                text = self._harvest_session_cookie(response, text)
            return RequestOutcome(kind="ok", status_code=status, reason=reason, body=text)

        if text:
            self._logger.error(
                "%s %s returned %d (%s)\nRequest Headers:\n%s%s\nResponse Length %d:\n%s",
                method,
                url,
                status,
                reason,
                headers_text,
                request_part,
                len(text),
                text,
            )
        else:
            self._logger.error(
                "%s %s returned %d (%s)\nRequest Headers:\n%s%s",
                method,
                url,
                status,
                reason,
                headers_text,
                request_part,
            )

        if status not in telemetry.AUTH_FAILURE_STATUSES:
            return RequestOutcome(kind="http_error", status_code=status, reason=reason, body=text, error=reason)

        if method == "GET":
            self._console.error("%s %s returned %d (%s)", method, url, status, reason)
        elif logged_body is not None:
            self._console.warning("%s %s returned %d (%s), Request:\n%s", method, url, status, reason, logged_body)
        else:
            self._console.warning("%s %s returned %d (%s)", method, url, status, reason)
        return RequestOutcome(kind="auth_error", status_code=status, reason=reason, body=text, error=reason)

    def _harvest_session_cookie(self, response: requests.Response, page: str) -> str:
        result = page
        # Last matching cookie wins.
        for raw_cookie in set_cookie_values(response):
            if raw_cookie.startswith(SESSION_TOKEN_PREFIX):
                result = build_redirect_artifact(raw_cookie, page)
        return result

    def _failed(self, method: str, url: str, exc: Exception) -> RequestOutcome:
        source = type(exc).__name__
        self._logger.error("%s %s threw %s (%s)", method, url, exc, source, exc_info=True)
        self._console.error("%s %s threw %s (%s)", method, url, exc, source)
        return RequestOutcome(kind="transport_error", error=f"{source}: {exc}")
