# backend/app/repositories/order_repository.py
"""
Order Repository for the TuitionHub Platform

Orders are unique per processor transaction id. ``add_order`` runs inside a
SAVEPOINT so that losing a race on the unique constraint leaves the caller's
transaction usable.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.enums import ApplicationStatus
from ..core.exceptions import RepositoryException
from ..models.application import TutorApplication
from ..models.order import Order
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository[Order]):
    """Repository for payment order records."""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def get_by_transaction_id(self, transaction_id: str) -> Optional[Order]:
        return self.find_one_by(transaction_id=transaction_id)

    def add_order(self, **fields: Any) -> Optional[Order]:
        """
        Insert an order.

        Returns:
            The new order, or None when another request already recorded
            the same transaction id.
        """
        try:
            with self.db.begin_nested():
                order = Order(**fields)
                self.db.add(order)
                self.db.flush()
            return order
        except IntegrityError:
            self.logger.info(
                "Order for transaction %s already exists", fields.get("transaction_id")
            )
            return None
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating order: {str(e)}")
            raise RepositoryException(f"Failed to create order: {str(e)}")

    def list_for_user_email(self, user_email: str) -> List[Order]:
        return self.find_by(user_email=user_email)

    def list_all(self) -> List[Order]:
        return self.get_all()

    def list_with_pending_application(self) -> List[Order]:
        """Orders whose linked application exists and is still Pending."""
        query = (
            self._build_query()
            .join(TutorApplication, TutorApplication.id == Order.tutor_id)
            .filter(TutorApplication.status == ApplicationStatus.PENDING.value)
            .order_by(Order.id)
        )
        return self._execute_query(query)
