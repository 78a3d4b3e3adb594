"""Raffle API package."""

from raffle.api.admin import admin_router
from raffle.api.routes import cart_router, event_router, order_router
from raffle.api.system import system_router

__all__ = ["system_router", "event_router", "cart_router", "order_router", "admin_router"]
