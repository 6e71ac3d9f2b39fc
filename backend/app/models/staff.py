"""Staff records."""

from sqlalchemy import Column, String

from app.db.base import Base, TimestampMixin


class StaffRecord(TimestampMixin, Base):
    """Staff member. ``id`` is the login username."""
    __tablename__ = "staff"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="ACTIVE")
    passcode = Column(String(12), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(30), nullable=True)
