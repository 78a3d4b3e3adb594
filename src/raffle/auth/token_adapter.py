"""Static bearer-token auth.

Tokens map to user ids (``RAFFLE_ADMIN_TOKENS``); the role comes from the
user's ``UserProfile``. A user without a profile gets the plain user role.
"""

from protean.utils.globals import current_domain

from raffle import config
from raffle.auth.port import AuthProvider, AuthSession
from raffle.auth.profile import UserProfile, UserRole


class StaticTokenAuth(AuthProvider):
    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self.tokens: dict[str, str] = dict(config.admin_tokens() if tokens is None else tokens)

    def issue(self, token: str, user_id: str) -> None:
        """Register a token at runtime."""
        self.tokens[token] = user_id

    def get_session(self, token: str | None) -> AuthSession | None:
        if not token:
            return None
        user_id = self.tokens.get(token)
        if user_id is None:
            return None

        profile = current_domain.repository_for(UserProfile).find_by_user_id(user_id)
        role = profile.role if profile else UserRole.USER.value
        return AuthSession(user_id=user_id, role=role)
