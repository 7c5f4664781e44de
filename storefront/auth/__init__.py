"""Authentication: demo credential login and the user session."""
from .session import AuthSession, UserSession, DEMO_CREDENTIALS

__all__ = [
    "AuthSession",
    "UserSession",
    "DEMO_CREDENTIALS",
]
