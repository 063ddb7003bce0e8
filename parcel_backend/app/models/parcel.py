"""
Parcel database model.

A parcel is a shipment booked by a user. Shipment details (sender, receiver,
weight, cost, ...) are an opaque payload; only the fields the server
reasons about are columns.
"""

from sqlalchemy import Column, String, DateTime
from parcel_backend.app.db.session import Base
from parcel_backend.app.models.document import DocumentMixin, utcnow
from parcel_backend.app.models.enums import PaymentStatus, DeliveryStatus


class Parcel(DocumentMixin, Base):
    """
    Parcel model.

    ``payment_status`` only moves from unpaid to paid, and only through the
    payment workflow. ``creation_date`` is always assigned by the server.
    """
    __tablename__ = "parcels"

    created_by = Column(String(255), index=True, nullable=True)
    creation_date = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    payment_status = Column(String(20), default=PaymentStatus.UNPAID.value, nullable=False, index=True)
    delivery_status = Column(String(30), default=DeliveryStatus.NOT_COLLECTED.value, nullable=False, index=True)
    assigned_rider_id = Column(String(32), index=True, nullable=True)

    def __repr__(self):
        return f"<Parcel(id={self.id}, created_by='{self.created_by}', payment_status='{self.payment_status}')>"
