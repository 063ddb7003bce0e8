"""
User database model.

Users are created on first sign-in and keyed by email.
"""

from sqlalchemy import Column, String, DateTime
from parcel_backend.app.db.session import Base
from parcel_backend.app.models.document import DocumentMixin, utcnow


class User(DocumentMixin, Base):
    """
    User record.

    Profile fields such as ``role`` or ``name`` are caller-supplied and live
    in the ``details`` payload.
    """
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_log_in = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
