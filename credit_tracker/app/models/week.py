"""SQLAlchemy model for the weeks inside a month."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, Money
from .timestamps import utcnow


class Week(Base):
    """Sub-period of a month holding its own credit allocation."""

    __tablename__ = "weeks"
    __table_args__ = (
        UniqueConstraint("month_id", "week_number", name="uq_weeks_month_week_number"),
        CheckConstraint("week_number >= 1", name="ck_weeks_week_number_positive"),
        CheckConstraint("end_date >= start_date", name="ck_weeks_valid_range"),
        CheckConstraint("credit_amount >= 0", name="ck_weeks_credit_amount_non_negative"),
    )

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    month_id = Column(
        GUID(),
        ForeignKey("months.id", ondelete="RESTRICT"),
        nullable=False,
    )
    week_number = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    credit_amount = Column(Money(), nullable=False, default=0, server_default="0")
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

    month = relationship("Month", back_populates="weeks")
    payments = relationship(
        "Payment",
        back_populates="week",
        order_by="Payment.payment_date.desc()",
        passive_deletes="all",
    )


Index("weeks_month_idx", Week.month_id)
