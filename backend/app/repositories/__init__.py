# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the TuitionHub Platform

This package provides the repository layer for data access,
separating business logic from database queries.

Key Components:
- BaseRepository: Foundation for all repositories with generic CRUD operations
- IRepository: Interface defining required methods for all repositories
- RepositoryFactory: Factory for creating repository instances
- TuitionRepository: Tuition postings (search, sort, pagination)
- ApplicationRepository: Tutor applications (Pending-only conditional edit)
- OrderRepository: Payment orders keyed by transaction id
- UserRepository: Accounts keyed by email

Usage:
    from app.repositories import RepositoryFactory

    repository = RepositoryFactory.create_tuition_repository(db)
    items, total = repository.list_paginated(page=1, page_size=10)
"""

from .application_repository import ApplicationRepository
from .base_repository import BaseRepository, IRepository
from .factory import RepositoryFactory
from .order_repository import OrderRepository
from .tuition_repository import TuitionRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "IRepository",
    "RepositoryFactory",
    "TuitionRepository",
    "ApplicationRepository",
    "OrderRepository",
    "UserRepository",
]
