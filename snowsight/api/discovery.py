from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from snowsight.api.base import ACCEPT_ANY, ACCEPT_HTML, ApiRequest, compact_json
from snowsight.config import load_config


def oauth_state(account_url: str, *, csrf: Optional[str] = None, browser_url: Optional[str] = None) -> str:
    cfg = load_config()
    return compact_json(
        {
            "isSecondaryUser": False,
            "csrf": csrf or cfg.oauth_csrf,
            "url": account_url,
            "browserUrl": browser_url or cfg.app_url,
        }
    )


def account_app_endpoints(account_name: str) -> ApiRequest:
    """Resolve the app server and account URLs for an account (sent to the app host)."""
    return ApiRequest("GET", "v0/validate-snowflake-url?" + urlencode({"url": account_name}), accept=ACCEPT_ANY)


def snowsight_client_id(account_url: str) -> ApiRequest:
    """Start the OAuth flow; the HTML page carries the Snowsight client id."""
    query = urlencode({"accountUrl": account_url, "state": oauth_state(account_url)})
    return ApiRequest("GET", f"start-oauth/snowflake?{query}", accept=ACCEPT_HTML)
