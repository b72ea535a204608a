"""
Login calls.

Snowsight: credentials -> master token -> OAuth redirect code -> session cookie.
Classic UI: credentials or SSO token -> master token and session token.
"""

from __future__ import annotations

from urllib.parse import urlencode

from snowsight.api.base import ACCEPT_HTML, JSON, ApiRequest, json_body
from snowsight.api.discovery import oauth_state

EXTERNAL_BROWSER = "externalbrowser"


def master_token_from_credentials(account_name: str, user_name: str, password: str) -> ApiRequest:
    body = json_body({"data": {"ACCOUNT_NAME": account_name, "LOGIN_NAME": user_name, "PASSWORD": password}})
    return ApiRequest("POST", "session/authenticate-request", body=body, content_type=JSON)


def oauth_redirect_from_oauth_token(client_id: str, oauth_token: str) -> ApiRequest:
    body = json_body({"masterToken": oauth_token, "clientId": client_id})
    return ApiRequest("POST", "oauth/authorization-request", body=body, content_type=JSON)


def authentication_token_from_oauth_redirect(account_url: str, redirect_code: str) -> ApiRequest:
    query = urlencode({"code": redirect_code, "state": oauth_state(account_url)})
    return ApiRequest("GET", f"complete-oauth/snowflake?{query}", accept=ACCEPT_HTML)


def login_with_credentials(account_name: str, user_name: str, password: str) -> ApiRequest:
    body = json_body({"data": {"ACCOUNT_NAME": account_name, "LOGIN_NAME": user_name, "PASSWORD": password}})
    return ApiRequest("POST", "session/v1/login-request", body=body, content_type=JSON)


def login_with_sso_token(account_name: str, user_name: str, token: str, proof_key: str) -> ApiRequest:
    body = json_body(
        {
            "data": {
                "ACCOUNT_NAME": account_name,
                "LOGIN_NAME": user_name,
                "AUTHENTICATOR": EXTERNAL_BROWSER,
                "TOKEN": token,
                "PROOF_KEY": proof_key,
            }
        }
    )
    return ApiRequest("POST", "session/v1/login-request", body=body, content_type=JSON)


def sso_login_link(account_name: str, user_name: str, redirect_port: int) -> ApiRequest:
    body = json_body(
        {
            "data": {
                "ACCOUNT_NAME": account_name,
                "LOGIN_NAME": user_name,
                "AUTHENTICATOR": EXTERNAL_BROWSER,
                "BROWSER_MODE_REDIRECT_PORT": int(redirect_port),
            }
        }
    )
    return ApiRequest("POST", "session/authenticator-request", body=body, content_type=JSON)
