"""Auth provider port (abstract interface).

Admin routes only need to know who is calling and which role the caller
has. Adapters resolve a bearer token to an ``AuthSession``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AuthProvider(ABC):
    """Abstract session lookup."""

    @abstractmethod
    def get_session(self, token: str | None) -> AuthSession | None:
        """Return the session for ``token``, or None when it is unknown."""
        ...
