"""
Payment database model.

One row per successful checkout. Rows are never updated or deleted.
"""

from sqlalchemy import Column, String, Float, DateTime, JSON
from parcel_backend.app.db.session import Base
from parcel_backend.app.models.document import DocumentMixin, utcnow


class Payment(DocumentMixin, Base):
    """
    Payment record referencing a parcel by id.

    ``parcel_id`` is not a foreign key: parcels can be deleted without
    touching their payment history.
    """
    __tablename__ = "payments"

    parcel_id = Column(String(32), index=True, nullable=False)
    email = Column(String(255), index=True, nullable=False)
    amount = Column(Float, nullable=False)
    payment_method = Column(JSON, nullable=True)
    transaction_id = Column(String(255), index=True, nullable=False)

    paid_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    paid_at_string = Column(String(40), nullable=False)

    def __repr__(self):
        return f"<Payment(id={self.id}, parcel_id='{self.parcel_id}', amount={self.amount})>"
