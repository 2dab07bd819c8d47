"""SQLAlchemy model for payments recorded against a week."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    func,
)
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, Money
from .timestamps import utcnow


class Payment(Base):
    """A single disbursement inside a week, attributed to a provider."""

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
        CheckConstraint("amount <= 999999.99", name="ck_payments_amount_max"),
    )

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    week_id = Column(
        GUID(),
        ForeignKey("weeks.id", ondelete="RESTRICT"),
        nullable=False,
    )
    provider_id = Column(
        GUID(),
        ForeignKey("providers.id", ondelete="RESTRICT"),
        nullable=False,
    )
    amount = Column(Money(), nullable=False)
    payment_date = Column(Date, nullable=False)
    description = Column(String(200), nullable=True)
    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

    week = relationship("Week", back_populates="payments")
    provider = relationship("Provider", back_populates="payments")


Index("payments_week_idx", Payment.week_id)
Index("payments_provider_date_idx", Payment.provider_id, Payment.payment_date)
