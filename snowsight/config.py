from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from snowsight import __version__

# Fixed by the protocol, not configurable.
REQUEST_TIMEOUT_SECONDS = 60
SESSION_TOKEN_PREFIX = "user-"
OAUTH_COMPLETION_PREFIX = "complete-oauth/snowflake"
LOGIN_PATH_PREFIXES = ("session/authenticate-request", "session/v1/login-request")
USER_AGENT = f"Snowflake Snowsight Extensions {__version__}"


@dataclass(frozen=True)
class SnowsightConfig:
    app_url: str  # Discovery host, also the OAuth `browserUrl`
    referer: str  # Referer sent on app-server calls
    oauth_csrf: str
    entity_list_limit: int
    log_level: str


def _env(name: str, default: str) -> str:
    return (os.getenv(name, "") or "").strip() or default


@lru_cache(maxsize=1)
def load_config() -> SnowsightConfig:
    """
    Load client configuration from environment variables.

    Missing or blank values fall back to the public Snowsight endpoints.
    """
    try:
        limit = int(_env("SNOWSIGHT_ENTITY_LIST_LIMIT", "1000"))
    except ValueError:
        limit = 1000
    limit = max(1, min(10000, limit))

    return SnowsightConfig(
        app_url=_env("SNOWSIGHT_APP_URL", "https://app.snowflake.com").rstrip("/"),
        referer=_env("SNOWSIGHT_REFERER", "https://app.snowflake.com/"),
        oauth_csrf=_env("SNOWSIGHT_OAUTH_CSRF", "SnowflakePS"),
        entity_list_limit=limit,
        log_level=_env("SNOWSIGHT_LOG_LEVEL", "INFO").upper(),
    )
