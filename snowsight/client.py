"""
Snowsight client: endpoint formatters bound to the request executor.

Methods return the raw response text, or an empty string when the call failed
(the reason is in the `snowsight.transport` log). Use `send()` to get the
`RequestOutcome` instead.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from snowsight.api import authentication, charts, dashboards, discovery, folders, organization, queries, worksheets
from snowsight.api.base import ApiRequest
from snowsight.auth.models import AuthenticationContext
from snowsight.config import SnowsightConfig, load_config
from snowsight.transport.executor import RequestExecutor, RequestOutcome


class SnowsightClient:
    """
    Calls for one account and user.

    Account-level calls (login, OAuth bridging) go to `account_url` with no session.
    Snowsight calls go to `app_server_url` with the session cookie in `snowsight_token`.
    """

    def __init__(
        self,
        *,
        account_url: str,
        app_server_url: Optional[str] = None,
        user_name: Optional[str] = None,
        snowsight_token: Optional[str] = None,
        executor: Optional[RequestExecutor] = None,
        config: Optional[SnowsightConfig] = None,
    ) -> None:
        self.account_url = account_url
        self.app_server_url = app_server_url
        self.user_name = user_name
        self.snowsight_token = snowsight_token
        self.executor = executor or RequestExecutor()
        self.config = config or load_config()

    def send(
        self, request: ApiRequest, base_url: str, context: Optional[AuthenticationContext] = None
    ) -> RequestOutcome:
        if request.role and context is not None:
            context = replace(context, role=request.role)
        return self.executor.execute(
            request.method,
            base_url,
            request.path,
            request.accept,
            context,
            body=request.body,
            content_type=request.content_type,
        )

    def _session_context(self) -> AuthenticationContext:
        if not self.snowsight_token or not self.user_name:
            raise ValueError("user_name and snowsight_token are required for Snowsight calls")
        return AuthenticationContext.for_user(
            self.user_name, self.account_url, self.snowsight_token, referer=self.config.referer
        )

    def _app_server(self) -> str:
        if not self.app_server_url:
            raise ValueError("app_server_url is required for Snowsight calls")
        return self.app_server_url

    def _on_app(self, request: ApiRequest) -> str:
        return self.send(request, self._app_server(), self._session_context()).text

    def _on_account(self, request: ApiRequest) -> str:
        return self.send(request, self.account_url).text

    # Discovery

    def account_app_endpoints(self, account_name: str) -> str:
        return self.send(discovery.account_app_endpoints(account_name), self.config.app_url).text

    def snowsight_client_id(self) -> str:
        return self.send(discovery.snowsight_client_id(self.account_url), self._app_server()).text

    # Snowsight authentication

    def master_token_from_credentials(self, account_name: str, user_name: str, password: str) -> str:
        return self._on_account(authentication.master_token_from_credentials(account_name, user_name, password))

    def oauth_redirect_from_oauth_token(self, client_id: str, oauth_token: str) -> str:
        return self._on_account(authentication.oauth_redirect_from_oauth_token(client_id, oauth_token))

    def authentication_token_from_oauth_redirect(self, redirect_code: str) -> str:
        """
        Exchange the OAuth redirect code for a Snowsight session.

        On success the result is the JSON produced by `build_redirect_artifact`;
        decode it with `parse_redirect_artifact`.
        """
        request = authentication.authentication_token_from_oauth_redirect(self.account_url, redirect_code)
        return self.send(request, self._app_server()).text

    # Classic UI authentication

    def login_with_credentials(self, account_name: str, user_name: str, password: str) -> str:
        return self._on_account(authentication.login_with_credentials(account_name, user_name, password))

    def login_with_sso_token(self, account_name: str, user_name: str, token: str, proof_key: str) -> str:
        return self._on_account(authentication.login_with_sso_token(account_name, user_name, token, proof_key))

    def sso_login_link(self, account_name: str, user_name: str, redirect_port: int) -> str:
        return self._on_account(authentication.sso_login_link(account_name, user_name, redirect_port))

    # Organization

    def organization_and_user_context(self, region: str, account_name: str) -> str:
        return self._on_app(organization.organization_and_user_context(region, account_name))

    # Worksheets

    def list_worksheets(self, organization_id: str) -> str:
        return self._on_app(worksheets.list_worksheets(organization_id))

    def create_worksheet(self, organization_id: str, name: str, folder_id: Optional[str] = None) -> str:
        return self._on_app(worksheets.create_worksheet(organization_id, name, folder_id))

    def update_worksheet(
        self, worksheet_id: str, query_text: str, role: str, warehouse: str, database: str, schema: str
    ) -> str:
        return self._on_app(worksheets.update_worksheet(worksheet_id, query_text, role, warehouse, database, schema))

    def delete_worksheet(self, worksheet_id: str) -> str:
        return self._on_app(worksheets.delete_worksheet(worksheet_id))

    def execute_worksheet(
        self,
        worksheet_id: str,
        query_text: str,
        param_refs: str,
        role: str,
        warehouse: str,
        database: str,
        schema: str,
    ) -> str:
        request = worksheets.execute_worksheet(
            worksheet_id, query_text, param_refs, role, warehouse, database, schema
        )
        return self._on_app(request)

    # Dashboards

    def list_dashboards(self, organization_id: str) -> str:
        return self._on_app(dashboards.list_dashboards(organization_id))

    def get_dashboard(self, dashboard_id: str) -> str:
        return self._on_app(dashboards.get_dashboard(dashboard_id))

    def create_dashboard(self, organization_id: str, name: str, role: str, warehouse: str) -> str:
        return self._on_app(dashboards.create_dashboard(organization_id, name, role, warehouse))

    def insert_dashboard_row(
        self, dashboard_id: str, worksheet_id: str, display_mode: str, row_index: int, row_height: int
    ) -> str:
        request = dashboards.insert_row_with_worksheet(dashboard_id, worksheet_id, display_mode, row_index, row_height)
        return self._on_app(request)

    def insert_dashboard_cell(
        self,
        dashboard_id: str,
        worksheet_id: str,
        display_mode: str,
        row_index: int,
        row_height: int,
        cell_index: int,
    ) -> str:
        request = dashboards.insert_cell_with_worksheet(
            dashboard_id, worksheet_id, display_mode, row_index, row_height, cell_index
        )
        return self._on_app(request)

    def delete_dashboard(self, dashboard_id: str) -> str:
        return self._on_app(dashboards.delete_dashboard(dashboard_id))

    def execute_dashboard(self, dashboard_id: str) -> str:
        return self._on_app(dashboards.execute_dashboard(dashboard_id))

    # Charts

    def get_chart(self, worksheet_id: str, chart_id: str) -> str:
        return self._on_app(charts.get_chart(worksheet_id, chart_id))

    def create_chart_from_worksheet(self, worksheet_id: str, chart_configuration: str) -> str:
        return self._on_app(charts.create_chart_from_worksheet(worksheet_id, chart_configuration))

    # Folders

    def list_folders(self, organization_id: str) -> str:
        return self._on_app(folders.list_folders(organization_id))

    # Queries

    def query_details(self, query_id: str, role: Optional[str] = None) -> str:
        return self._on_app(queries.query_details(query_id, role))

    def query_profile(self, query_id: str, role: Optional[str] = None, retry_number: Optional[int] = None) -> str:
        return self._on_app(queries.query_profile(query_id, role, retry_number))
