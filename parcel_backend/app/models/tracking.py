"""
Tracking log database model.
"""

from sqlalchemy import Column, String, Text, DateTime
from parcel_backend.app.db.session import Base
from parcel_backend.app.models.document import DocumentMixin, utcnow


class TrackingEntry(DocumentMixin, Base):
    """Append-only status event for a parcel."""
    __tablename__ = "tracking"

    tracking_id = Column(String(64), index=True, nullable=False)
    parcel_id = Column(String(32), index=True, nullable=True)
    status = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    time = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_by = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<TrackingEntry(id={self.id}, tracking_id='{self.tracking_id}', status='{self.status}')>"
