"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Header, HTTPException

from raffle.auth import get_auth
from raffle.auth.port import AuthSession
from raffle.checkout.backend import RaffleBackend

PERMISSION_DENIED = "You do not have permission to access this page"


def get_backend() -> RaffleBackend:
    return RaffleBackend()


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_session(authorization: str | None = Header(default=None)) -> AuthSession | None:
    return get_auth().get_session(_bearer_token(authorization))


def require_admin(session: AuthSession | None = Depends(get_session)) -> AuthSession:
    """Allow only callers whose profile carries the admin role."""
    if session is None:
        raise HTTPException(
            status_code=401,
            detail="Please sign in to continue",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not session.is_admin:
        raise HTTPException(status_code=403, detail=PERMISSION_DENIED)
    return session
