"""SQLAlchemy model for credit months."""

from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID, Money
from .timestamps import utcnow


class Month(Base):
    """Top-level period that groups weeks and carries the rolled-up credit."""

    __tablename__ = "months"
    __table_args__ = (
        CheckConstraint("year >= 2020 AND year <= 2030", name="ck_months_year_range"),
        CheckConstraint("total_credit >= 0", name="ck_months_total_credit_non_negative"),
    )

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(50), nullable=False)
    year = Column(Integer, nullable=False)
    total_credit = Column(Money(), nullable=False, default=0, server_default="0")
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

    weeks = relationship(
        "Week",
        back_populates="month",
        order_by="Week.week_number",
        passive_deletes="all",
    )
