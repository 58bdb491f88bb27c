"""
SQLAlchemy ORM models for the Product Catalog API.

Tables:
    users             — login accounts (CLIENT or ADMIN)
    categories        — product categories
    products          — catalog entries
    product_category  — many-to-many join between products and categories
    orders            — client orders
    order_items       — order lines; a product referenced here cannot be deleted
"""
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Float, Date, DateTime, Text, ForeignKey, Table,
    Index,
)
from sqlalchemy.orm import relationship

from database import Base
from domain.enums import OrderStatus, Role


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


product_category = Table(
    "product_category",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id"), primary_key=True),
)


class User(Base):
    """Login accounts. Exactly one role per user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), unique=True, nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    birth_date = Column(Date, nullable=True)
    password_hash = Column(String(60), nullable=False)  # bcrypt
    role = Column(String(20), nullable=False, default=Role.CLIENT.value)  # "CLIENT" | "ADMIN"
    created_at = Column(DateTime, default=_now_utc)


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(80), unique=True, nullable=False)


class Product(Base):
    """Catalog entries. Ids are never reused (sqlite_autoincrement)."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(80), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    img_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=_now_utc)
    updated_at = Column(DateTime, default=_now_utc, onupdate=_now_utc)

    # selectin: async sessions cannot lazy-load during serialization
    categories = relationship(
        "Category",
        secondary=product_category,
        lazy="selectin",
        order_by="Category.id",
    )

    __table_args__ = {"sqlite_autoincrement": True}


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    moment = Column(DateTime, nullable=False, default=_now_utc, index=True)
    status = Column(String(30), nullable=False, default=OrderStatus.WAITING_PAYMENT.value, index=True)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    client = relationship("User", lazy="selectin")
    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        order_by="OrderItem.product_id",
    )

    __table_args__ = (
        # For client order history: filter by client_id, order by moment
        Index("ix_orders_client_moment", "client_id", "moment"),
    )


class OrderItem(Base):
    """Order lines. The unit price is a snapshot taken when the order is placed."""
    __tablename__ = "order_items"

    order_id = Column(Integer, ForeignKey("orders.id"), primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), primary_key=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Float, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
    product = relationship("Product", lazy="selectin")

    @property
    def sub_total(self) -> float:
        return self.price * self.quantity
