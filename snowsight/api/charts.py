from __future__ import annotations

from snowsight.api.base import FORM, ApiRequest, form_body, path_segment


def get_chart(worksheet_id: str, chart_id: str) -> ApiRequest:
    return ApiRequest("GET", f"v0/queries/{path_segment(worksheet_id)}/charts/{path_segment(chart_id)}")


def create_chart_from_worksheet(worksheet_id: str, chart_configuration: str) -> ApiRequest:
    # chart_configuration is the chart JSON as exported from Snowsight.
    return ApiRequest(
        "POST",
        f"v0/queries/{path_segment(worksheet_id)}/charts",
        body=form_body(chart=chart_configuration),
        content_type=FORM,
    )
