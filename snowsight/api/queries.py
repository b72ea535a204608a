from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from snowsight.api.base import ApiRequest, path_segment

MONITORING_PATH = "v0/session/request/monitoring"


def query_details(query_id: str, role: Optional[str] = None) -> ApiRequest:
    return ApiRequest("GET", f"{MONITORING_PATH}/queries/{path_segment(query_id)}?max=1001", role=role or None)


def query_profile(query_id: str, role: Optional[str] = None, retry_number: Optional[int] = None) -> ApiRequest:
    """Query plan data; `retry_number` selects a specific job retry attempt."""
    path = f"{MONITORING_PATH}/query-plan-data/{path_segment(query_id)}"
    if retry_number is not None:
        path += "?" + urlencode({"jobRetryAttemptRank": int(retry_number)})
    return ApiRequest("GET", path, role=role or None)
