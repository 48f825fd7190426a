"""
Booking model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Index

from eventbook.core.db import Base

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    # Plain reference; existence is checked by the booking validator, not a foreign key
    event_id = Column(String(32), nullable=False, index=True)
    email = Column(String(320), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Supports duplicate-booking lookups; duplicates are not rejected
    __table_args__ = (
        Index("ix_bookings_event_id_email", "event_id", "email"),
    )
