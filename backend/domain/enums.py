"""
Domain enums (minimal set used for clarity in services).
"""

from enum import Enum


class Role(str, Enum):
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"


class Operation(str, Enum):
    """Operations the authorization policy knows about."""
    READ = "READ"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    PLACE_ORDER = "PLACE_ORDER"
    READ_ORDER = "READ_ORDER"
    READ_PROFILE = "READ_PROFILE"


class OrderStatus(str, Enum):
    WAITING_PAYMENT = "WAITING_PAYMENT"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"
