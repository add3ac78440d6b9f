"""
Purchase order models for stock bought from suppliers.
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON
import enum

from stockroom.core.database import Base, new_id, utcnow


class OrderStatus(enum.Enum):
    """Shipment status of an order or of one product within it."""
    SHIPPING = "SHIPPING"
    PARTIALLY_ARRIVED = "PARTIALLY ARRIVED"
    COMPLETED = "COMPLETED"


class Order(Base):
    """Model for purchase orders.

    Line items live in ``products`` as a list of dicts with product_id,
    product_name, size, quantity, price, arrived_quantity and status.
    """
    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=new_id)
    order_number = Column(Integer, unique=True, index=True, nullable=False)

    # Line items
    products = Column(JSON, default=list, nullable=False)
    total_item_count = Column(Integer, default=0, nullable=False)

    # Purchase details
    date = Column(DateTime(timezone=True), nullable=False)
    payment_method = Column(String(50), nullable=False)
    supplier = Column(String(200), nullable=True)
    notes = Column(Text, nullable=True)

    # Money
    total_order_amount = Column(Float, nullable=True)
    fees_and_shipping = Column(Float, nullable=True)
    product_cost = Column(Float, nullable=True)

    # Shipping
    carrier = Column(String(50), nullable=True)
    ship_start_date = Column(DateTime(timezone=True), nullable=True)
    ship_arrival_date = Column(DateTime(timezone=True), nullable=True)
    tracking_links = Column(JSON, default=list, nullable=False)
    status = Column(String(32), default=OrderStatus.SHIPPING.value, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Order(id={self.id}, number={self.order_number}, status='{self.status}')>"
