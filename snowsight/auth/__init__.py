from snowsight.auth.cookies import InvalidSessionTokenError, parse_session_cookie
from snowsight.auth.models import AuthenticationContext, SessionCookie

__all__ = [
    "AuthenticationContext",
    "InvalidSessionTokenError",
    "SessionCookie",
    "parse_session_cookie",
]
