"""Customer (CRM) records."""

from sqlalchemy import Column, Date, Integer, String, Text
from sqlalchemy.orm import validates

from app.db.base import Base, TimestampMixin
from app.models.validators import non_negative


class CustomerRecord(TimestampMixin, Base):
    __tablename__ = "customers"

    id = Column(String(64), primary_key=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    loyalty_points = Column(Integer, nullable=False, default=0)
    last_visit = Column(Date, nullable=False)

    @validates('loyalty_points')
    def _validate_points(self, key, value):
        return non_negative(key, value)
