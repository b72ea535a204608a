from __future__ import annotations

from typing import Any, Dict, Optional

from snowsight.api.base import FORM, ApiRequest, compact_json, form_body, path_segment
from snowsight.api.worksheets import list_entities

FOLDERS_PATH = "v0/folders"

DISPLAY_MODES = ("table", "chart")


def _query_cell(worksheet_id: str, display_mode: str) -> Dict[str, Any]:
    if display_mode not in DISPLAY_MODES:
        raise ValueError(f"display_mode must be one of {DISPLAY_MODES}, got {display_mode!r}")
    return {"pid": worksheet_id, "displayMode": display_mode, "type": "query"}


def _transform(dashboard_id: str, action: str, params: Dict[str, Any]) -> ApiRequest:
    transforms = compact_json([{"action": action, "params": params}])
    return ApiRequest(
        "POST",
        f"{FOLDERS_PATH}/{path_segment(dashboard_id)}",
        body=form_body(action="transformDashboard", transforms=transforms),
        content_type=FORM,
    )


def list_dashboards(organization_id: str, limit: Optional[int] = None) -> ApiRequest:
    return list_entities(organization_id, "dashboard", limit)


def get_dashboard(dashboard_id: str) -> ApiRequest:
    return ApiRequest("GET", f"{FOLDERS_PATH}/{path_segment(dashboard_id)}")


def create_dashboard(organization_id: str, name: str, role: str, warehouse: str) -> ApiRequest:
    body = form_body(
        orgId=organization_id,
        name=name,
        role=role,
        warehouse=warehouse,
        type="dashboard",
        visibility="organization",
    )
    return ApiRequest("POST", FOLDERS_PATH, body=body, content_type=FORM)


def insert_row_with_worksheet(
    dashboard_id: str, worksheet_id: str, display_mode: str, row_index: int, row_height: int
) -> ApiRequest:
    """Add a new dashboard row holding a single worksheet tile."""
    cell = _query_cell(worksheet_id, display_mode)
    params = {
        "pid": worksheet_id,
        "rowIdx": int(row_index),
        "row": {"height": int(row_height), "cells": [cell]},
        "cell": cell,
    }
    return _transform(dashboard_id, "insertRow", params)


def insert_cell_with_worksheet(
    dashboard_id: str,
    worksheet_id: str,
    display_mode: str,
    row_index: int,
    row_height: int,
    cell_index: int,
) -> ApiRequest:
    """Add a worksheet tile to an existing row at `cell_index`."""
    cell = _query_cell(worksheet_id, display_mode)
    params = {
        "pid": worksheet_id,
        "rowIdx": int(row_index),
        "cellIdx": int(cell_index),
        "row": {"height": int(row_height), "cells": [cell]},
        "cell": cell,
    }
    return _transform(dashboard_id, "insertCell", params)


def delete_dashboard(dashboard_id: str) -> ApiRequest:
    return ApiRequest("DELETE", f"{FOLDERS_PATH}/{path_segment(dashboard_id)}")


def execute_dashboard(dashboard_id: str) -> ApiRequest:
    return ApiRequest(
        "POST",
        f"{FOLDERS_PATH}/{path_segment(dashboard_id)}",
        body=form_body(action="refresh", drafts="{}"),
        content_type=FORM,
    )
