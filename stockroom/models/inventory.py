"""
Catalog and inventory models for products and per-size stock.
"""
from sqlalchemy import Column, String, DateTime, Text, Boolean, JSON

from stockroom.core.database import Base, new_id, utcnow


class Product(Base):
    """Model for catalog products."""
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), unique=True, index=True, nullable=False)
    image = Column(Text, nullable=False)
    image_back = Column(Text, nullable=True)

    # Classification
    brand = Column(String(100), default="", nullable=False)
    category = Column(String(100), default="", nullable=False)
    type = Column(String(200), nullable=False)  # Falls back to the product name
    colorway = Column(String(100), default="", nullable=False)
    product_code = Column(String(100), default="", nullable=False)

    # Size run and the quantities recorded on the product itself
    sizes = Column(JSON, default=list, nullable=False)
    size_quantities = Column(JSON, default=dict, nullable=False)
    in_inventory = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}')>"


class InventoryItem(Base):
    """Model for a product tracked in inventory, with quantities by size."""
    __tablename__ = "inventory"

    id = Column(String(32), primary_key=True, default=new_id)
    product_id = Column(String(32), unique=True, index=True, nullable=False)
    size_quantities = Column(JSON, default=dict, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<InventoryItem(product_id={self.product_id}, sizes={len(self.size_quantities or {})})>"
