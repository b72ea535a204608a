from __future__ import annotations

from typing import Optional

from snowsight.api.base import ApiRequest
from snowsight.api.worksheets import list_entities


def list_folders(organization_id: str, limit: Optional[int] = None) -> ApiRequest:
    return list_entities(organization_id, "folder", limit)
