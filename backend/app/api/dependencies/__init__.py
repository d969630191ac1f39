# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from .auth import CurrentCaller, get_current_caller, require_admin, require_roles
from .database import get_db
from .services import (
    get_application_service,
    get_checkout_gateway,
    get_order_service,
    get_tuition_service,
    get_user_service,
)

__all__ = [
    # Auth
    "CurrentCaller",
    "get_current_caller",
    "require_admin",
    "require_roles",
    # Database
    "get_db",
    # Services
    "get_application_service",
    "get_checkout_gateway",
    "get_order_service",
    "get_tuition_service",
    "get_user_service",
]
