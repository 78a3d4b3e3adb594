"""Auth provider factory.

Provides get_auth() / set_auth() to swap implementations. The default is
StaticTokenAuth loaded from RAFFLE_ADMIN_TOKENS.
"""

from raffle.auth.port import AuthProvider
from raffle.auth.token_adapter import StaticTokenAuth

_current_auth: AuthProvider | None = None


def get_auth() -> AuthProvider:
    global _current_auth
    if _current_auth is None:
        _current_auth = StaticTokenAuth()
    return _current_auth


def set_auth(auth: AuthProvider) -> None:
    """Override the active auth provider (useful for tests)."""
    global _current_auth
    _current_auth = auth


def reset_auth() -> None:
    global _current_auth
    _current_auth = None
