import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from raffle.api import admin_router, cart_router, event_router, order_router, system_router
from raffle.api.errors import register_exception_handlers
from raffle.auth import set_auth
from raffle.auth.profile import RegisterUserProfile
from raffle.auth.token_adapter import StaticTokenAuth


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(system_router)
    app.include_router(event_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def admin_auth():
    current_domain.process(
        RegisterUserProfile(user_id="admin-1", email="admin@example.com", role="admin"),
        asynchronous=False,
    )
    current_domain.process(
        RegisterUserProfile(user_id="user-1", email="user@example.com", role="user"),
        asynchronous=False,
    )
    set_auth(StaticTokenAuth(tokens={"admin-token": "admin-1", "user-token": "user-1"}))
