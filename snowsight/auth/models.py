from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AuthenticationContext:
    """Credentials and identity headers for a single call."""

    snowsight_token: Optional[str] = None  # Raw `user-...=...; Path=/; ...` cookie string
    classic_token: Optional[str] = None  # Classic UI session token
    snowflake_context: Optional[str] = None  # "{user}::{accountUrl}"
    referer: Optional[str] = None
    role: Optional[str] = None  # Active role override (GET only)

    def __post_init__(self) -> None:
        if self.snowsight_token and self.classic_token:
            raise ValueError("AuthenticationContext accepts a Snowsight token or a classic UI token, not both")

    @classmethod
    def for_user(
        cls,
        user_name: str,
        account_url: str,
        snowsight_token: str,
        *,
        referer: Optional[str] = None,
        role: Optional[str] = None,
    ) -> "AuthenticationContext":
        return cls(
            snowsight_token=snowsight_token,
            snowflake_context=f"{user_name}::{account_url}",
            referer=referer,
            role=role,
        )


@dataclass(frozen=True)
class SessionCookie:
    name: str
    value: str
    domain: str
    path: str = "/"
    expires: Optional[datetime] = None
    http_only: bool = False
    secure: bool = False
