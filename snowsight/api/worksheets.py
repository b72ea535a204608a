from __future__ import annotations

from typing import Optional

from snowsight.api.base import FORM, ApiRequest, entity_list_options, execution_context, form_body, path_segment
from snowsight.config import load_config

QUERIES_PATH = "v0/queries"


def list_entities(organization_id: str, entity_type: str, limit: Optional[int] = None) -> ApiRequest:
    """Entity listing shared by worksheets, dashboards and folders."""
    options = entity_list_options([entity_type], limit or load_config().entity_list_limit)
    return ApiRequest(
        "POST",
        f"v0/organizations/{path_segment(organization_id)}/entities/list",
        body=form_body(options=options, location="worksheets"),
        content_type=FORM,
    )


def list_worksheets(organization_id: str, limit: Optional[int] = None) -> ApiRequest:
    return list_entities(organization_id, "query", limit)


def create_worksheet(organization_id: str, name: str, folder_id: Optional[str] = None) -> ApiRequest:
    body = form_body(action="create", orgId=organization_id, name=name, folderId=folder_id)
    return ApiRequest("POST", QUERIES_PATH, body=body, content_type=FORM)


def update_worksheet(
    worksheet_id: str,
    query_text: str,
    role: str,
    warehouse: str,
    database: str,
    schema: str,
) -> ApiRequest:
    """Save the worksheet draft with its query text and execution context."""
    body = form_body(
        action="saveDraft",
        id=worksheet_id,
        projectId=worksheet_id,
        executionContext=execution_context(role, warehouse, database, schema),
        query=query_text,
    )
    return ApiRequest("POST", QUERIES_PATH, body=body, content_type=FORM)


def delete_worksheet(worksheet_id: str) -> ApiRequest:
    return ApiRequest("DELETE", f"{QUERIES_PATH}/{path_segment(worksheet_id)}")


def execute_worksheet(
    worksheet_id: str,
    query_text: str,
    param_refs: str,
    role: str,
    warehouse: str,
    database: str,
    schema: str,
) -> ApiRequest:
    body = form_body(
        action="execute",
        projectId=worksheet_id,
        executionContext=execution_context(role, warehouse, database, schema),
        query=query_text,
        paramRefs=param_refs,
    )
    return ApiRequest("POST", QUERIES_PATH, body=body, content_type=FORM)
