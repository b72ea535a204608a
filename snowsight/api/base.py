from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional
from urllib.parse import quote, urlencode

ACCEPT_ANY = "*/*"
ACCEPT_HTML = "text/html"
JSON = "application/json"
FORM = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class ApiRequest:
    method: str  # GET|POST|DELETE
    path: str  # Relative to the base URL, may carry a query string
    accept: str = JSON
    body: Optional[str] = None
    content_type: Optional[str] = None
    role: Optional[str] = None  # Sent as x-snowflake-role (GET only)


def compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def json_body(value: Any) -> str:
    # Default separators keep `"PASSWORD": "..."` in the shape the log redaction expects.
    return json.dumps(value)


def form_body(**fields: Any) -> str:
    return urlencode([(k, v) for k, v in fields.items() if v is not None])


def path_segment(value: str) -> str:
    return quote(str(value), safe="")


def entity_list_options(types: List[str], limit: int) -> str:
    return compact_json(
        {
            "sort": {"col": "viewed", "dir": "desc"},
            "limit": limit,
            "owner": None,
            "types": types,
            "showNeverViewed": "if-invited",
        }
    )


def execution_context(role: str, warehouse: str, database: str, schema: str) -> str:
    return compact_json({"role": role, "warehouse": warehouse, "database": database, "schema": schema})
