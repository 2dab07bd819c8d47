"""SQLAlchemy model for payment providers."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Text, func
from sqlalchemy.orm import relationship

from ..database import Base
from ..db_types import GUID
from .timestamps import utcnow


class Provider(Base):
    """Payee referenced by payments."""

    __tablename__ = "providers"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    contact_info = Column(String(200), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="1")
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

    payments = relationship(
        "Payment",
        back_populates="provider",
        order_by="Payment.payment_date",
        passive_deletes="all",
    )
