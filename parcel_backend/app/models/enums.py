"""
Status enumerations for parcels and riders.
"""

import enum


class PaymentStatus(str, enum.Enum):
    """
    Parcel payment status.

    Status flow:
        unpaid → paid (terminal)
    """
    UNPAID = "unpaid"
    PAID = "paid"


class DeliveryStatus(str, enum.Enum):
    """
    Parcel delivery status.

    Status flow:
        not_collected → rider_assigned → in_transit → delivered
    """
    NOT_COLLECTED = "not_collected"
    RIDER_ASSIGNED = "rider_assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"


class RiderStatus(str, enum.Enum):
    """
    Rider statuses seen in practice.

    The stored value is an open string; these are the ones the rider
    listing endpoints query for.
    """
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"
