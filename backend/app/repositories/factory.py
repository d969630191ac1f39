# backend/app/repositories/factory.py
"""
Repository Factory for the TuitionHub Platform

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .application_repository import ApplicationRepository
    from .order_repository import OrderRepository
    from .tuition_repository import TuitionRepository
    from .user_repository import UserRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations in tests.
    """

    @staticmethod
    def create_tuition_repository(db: Session) -> "TuitionRepository":
        """Create repository for tuition postings."""
        from .tuition_repository import TuitionRepository

        return TuitionRepository(db)

    @staticmethod
    def create_application_repository(db: Session) -> "ApplicationRepository":
        """Create repository for tutor applications."""
        from .application_repository import ApplicationRepository

        return ApplicationRepository(db)

    @staticmethod
    def create_order_repository(db: Session) -> "OrderRepository":
        """Create repository for payment orders."""
        from .order_repository import OrderRepository

        return OrderRepository(db)

    @staticmethod
    def create_user_repository(db: Session) -> "UserRepository":
        """Create repository for user accounts."""
        from .user_repository import UserRepository

        return UserRepository(db)
