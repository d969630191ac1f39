"""Order model: the locally persisted record of a confirmed payment."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..core.constants import ORDER_STATUS_PAID
from ..core.ulid_helper import generate_ulid
from ..database import Base


class Order(Base):
    """Payment record keyed uniquely by the processor's payment intent id."""

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(26), primary_key=True, default=generate_ulid)
    # Deliberately not a foreign key: deleting an application keeps its order.
    tutor_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ORDER_STATUS_PAID)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (UniqueConstraint("transaction_id", name="uq_orders_transaction_id"),)

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, transaction={self.transaction_id}, amount={self.amount})>"
