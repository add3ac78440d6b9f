"""
Sales models for marketplace and wholesale transactions.
"""
from sqlalchemy import Column, String, Float, DateTime, Text, Enum, JSON
import enum

from stockroom.core.database import Base, enum_values, new_id, utcnow


class SalePlatform(enum.Enum):
    """Where a sale was made."""
    DEPOP = "Depop"
    EBAY = "Ebay"
    POSHMARK = "Poshmark"
    VINTED = "Vinted"
    MERCARI = "Mercari"
    CURTSY = "Curtsy"
    STORE = "Store"
    RESELLER = "Reseller"
    INTERNATIONAL = "International"


class PaymentMethod(enum.Enum):
    """Payment method enumeration."""
    ZELLE = "Zelle"
    VENMO = "Venmo"
    CASHAPP = "Cashapp"
    APPLE_CASH = "Apple Cash"
    CRYPTO = "Crypto"
    CASH = "Cash"


class SaleType(enum.Enum):
    """Online marketplace sale or wholesale to a buyer."""
    ONLINE = "online"
    WHOLESALE = "wholesale"


class WholesaleType(enum.Enum):
    PHYSICAL = "Physical"
    STORE = "Store"
    INTERNATIONAL = "International"


class StoreType(enum.Enum):
    """Kind of wholesale buyer."""
    STORE = "Store"
    RESELLER = "Reseller"
    INTERNATIONAL = "International"


class Sale(Base):
    """Model for sales.

    ``line_items`` is a list of dicts with product_id, product_name,
    quantity, price_per_unit and size.
    """
    __tablename__ = "sales"

    id = Column(String(32), primary_key=True, default=new_id)
    platform = Column(Enum(SalePlatform, values_callable=enum_values, native_enum=False), nullable=False)
    sale_type = Column(
        Enum(SaleType, values_callable=enum_values, native_enum=False),
        default=SaleType.ONLINE,
        nullable=False
    )
    wholesale_type = Column(Enum(WholesaleType, values_callable=enum_values, native_enum=False), nullable=True)

    # Buyer (wholesale)
    buyer_store_id = Column(String(32), nullable=True)
    buyer_store_name = Column(String(200), nullable=True)

    # Payment information
    payment_method = Column(Enum(PaymentMethod, values_callable=enum_values, native_enum=False), nullable=True)
    line_items = Column(JSON, default=list, nullable=False)
    total_amount = Column(Float, nullable=False, default=0.0)
    notes = Column(Text, default="", nullable=False)

    # Timestamps
    date_sold = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Sale(id={self.id}, platform={self.platform}, total={self.total_amount})>"


class Store(Base):
    """Model for wholesale buyers (stores, resellers, international)."""
    __tablename__ = "stores"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(200), index=True, nullable=False)
    type = Column(
        Enum(StoreType, values_callable=enum_values, native_enum=False),
        default=StoreType.STORE,
        nullable=False
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Store(id={self.id}, name='{self.name}', type={self.type})>"
