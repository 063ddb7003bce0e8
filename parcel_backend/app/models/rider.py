"""
Rider database model.
"""

from sqlalchemy import Column, String, DateTime
from parcel_backend.app.db.session import Base
from parcel_backend.app.models.document import DocumentMixin, utcnow


class Rider(DocumentMixin, Base):
    """
    Rider application.

    ``status`` is whatever the applicant or an admin last wrote; it is not
    restricted to the values in ``RiderStatus``.
    """
    __tablename__ = "riders"

    email = Column(String(255), index=True, nullable=True)
    status = Column(String(30), index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Rider(id={self.id}, email='{self.email}', status='{self.status}')>"
