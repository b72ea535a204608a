"""
Endpoint formatters.

Each function is pure: it turns caller identifiers into an `ApiRequest`
(method, path, accept, body, content type) and does no I/O.
"""

from snowsight.api.base import ApiRequest

__all__ = ["ApiRequest"]
