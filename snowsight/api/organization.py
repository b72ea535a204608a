from __future__ import annotations

from snowsight.api.base import ApiRequest, path_segment


def organization_and_user_context(region: str, account_name: str) -> ApiRequest:
    return ApiRequest("GET", f"bootstrap/{path_segment(region)}/{path_segment(account_name)}")
