from __future__ import annotations

import json
import logging

import pytest

from snowsight.client import SnowsightClient
from snowsight.transport.executor import parse_redirect_artifact

APP = "https://apps-api.c1.us-west-2.aws.app.snowflake.com"
ACCOUNT = "https://acct.snowflakecomputing.com"
TOKEN = "user-abc=VALUE==; Path=/; HttpOnly; Secure"


@pytest.fixture
def client() -> SnowsightClient:
    return SnowsightClient(account_url=ACCOUNT, app_server_url=APP, user_name="JDOE", snowsight_token=TOKEN)


def test_app_calls_carry_session_identity(fake_http, client) -> None:
    fake_http.respond(200, '{"entities": []}')

    assert client.list_worksheets("123") == '{"entities": []}'

    call = fake_http.last
    assert call["url"] == f"{APP}/v0/organizations/123/entities/list"
    assert call["headers"]["x-snowflake-context"] == f"JDOE::{ACCOUNT}"
    assert call["headers"]["Referer"] == "https://app.snowflake.com/"
    assert [c.name for c in call["cookies"]] == ["user-abc"]
    assert call["cookies"][0].domain == "apps-api.c1.us-west-2.aws.app.snowflake.com"


def test_query_lookups_send_role_override(fake_http, client) -> None:
    fake_http.respond(200, "{}")
    client.query_profile("01a", role="ACCOUNTADMIN", retry_number=1)

    call = fake_http.last
    assert call["method"] == "GET"
    assert call["headers"]["x-snowflake-role"] == "ACCOUNTADMIN"
    assert call["url"].endswith("query-plan-data/01a?jobRetryAttemptRank=1")


def test_login_goes_to_account_without_session(fake_http, client, caplog) -> None:
    caplog.set_level(logging.DEBUG)
    fake_http.respond(200, '{"data": {"masterToken": "m"}}')

    out = client.master_token_from_credentials("acct", "JDOE", "hunter2")

    assert json.loads(out)["data"]["masterToken"] == "m"
    call = fake_http.last
    assert call["url"] == f"{ACCOUNT}/session/authenticate-request"
    assert call["cookies"] == []
    assert "x-snowflake-context" not in call["headers"]
    assert "hunter2" not in caplog.text


def test_oauth_completion_round_trip(fake_http, client) -> None:
    cookie = "user-9f=NEWTOKEN==; Path=/; HttpOnly; Secure"
    fake_http.respond(302, "<html>ok</html>", reason="Found", set_cookies=[cookie])

    result = client.authentication_token_from_oauth_redirect("C0DE")

    assert fake_http.last["url"].startswith(f"{APP}/complete-oauth/snowflake?code=C0DE&state=")
    assert parse_redirect_artifact(result) == {"authenticationCookie": cookie, "resultPage": "<html>ok</html>"}


def test_discovery_uses_app_host(fake_http, client) -> None:
    fake_http.respond(200, "{}")
    client.account_app_endpoints("myorg-acct")
    assert fake_http.last["url"] == "https://app.snowflake.com/v0/validate-snowflake-url?url=myorg-acct"


def test_failures_come_back_empty_with_outcome_available(fake_http, client) -> None:
    from snowsight.api.dashboards import get_dashboard
    from snowsight.auth.models import AuthenticationContext

    fake_http.respond(404, "missing", reason="Not Found")
    assert client.get_dashboard("d1") == ""

    outcome = client.send(get_dashboard("d1"), APP, AuthenticationContext(snowsight_token=TOKEN))
    assert outcome.kind == "http_error"
    assert outcome.status_code == 404
    assert outcome.body == "missing"


def test_delete_uses_delete_method(fake_http, client) -> None:
    fake_http.respond(204, "")
    assert client.delete_dashboard("d1") == ""
    assert fake_http.last["method"] == "DELETE"
    assert fake_http.last["url"] == f"{APP}/v0/folders/d1"


def test_session_calls_need_token_and_app_server() -> None:
    with pytest.raises(ValueError, match="snowsight_token"):
        SnowsightClient(account_url=ACCOUNT, app_server_url=APP).list_folders("1")
    with pytest.raises(ValueError, match="app_server_url"):
        SnowsightClient(account_url=ACCOUNT, user_name="u", snowsight_token=TOKEN).list_folders("1")
