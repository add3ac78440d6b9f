"""
Sales Logger service for recording marketplace and wholesale sales.
"""
import logging
import math
from typing import List, Dict, Any, Optional
from datetime import datetime, timedelta
from sqlalchemy import and_
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import as_utc, utcnow
from stockroom.models.sales import Sale, SalePlatform, SaleType, WholesaleType, PaymentMethod

logger = logging.getLogger(__name__)


def _to_number(value: Any) -> float:
    """Numeric value of client input; anything non-numeric counts as 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) if number.is_integer() else number


def _parse_enum(enum_class, value: Any, label: str):
    try:
        return enum_class(value)
    except ValueError:
        raise ValueError(f"Invalid {label}: {value}")


def sanitize_line_items(line_items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Normalize sale line items, dropping the unusable ones.

    Items without a product id or name, or with no positive quantity, are
    removed.
    """
    sanitized = []
    for item in line_items:
        if not isinstance(item, dict):
            continue
        line = {
            "product_id": item.get("product_id"),
            "product_name": item.get("product_name"),
            "quantity": _to_number(item.get("quantity")),
            "price_per_unit": _to_number(item.get("price_per_unit")),
            "size": item.get("size"),
        }
        if line["product_id"] and line["product_name"] and line["quantity"] > 0:
            sanitized.append(line)
    return sanitized


def serialize_sale(sale: Sale) -> Dict[str, Any]:
    return {
        "id": sale.id,
        "platform": sale.platform.value,
        "sale_type": sale.sale_type.value,
        "wholesale_type": sale.wholesale_type.value if sale.wholesale_type else None,
        "buyer_store_id": sale.buyer_store_id,
        "buyer_store_name": sale.buyer_store_name,
        "payment_method": sale.payment_method.value if sale.payment_method else None,
        "line_items": sale.line_items or [],
        "total_amount": sale.total_amount,
        "notes": sale.notes or "",
        "date_sold": sale.date_sold,
        "created_at": sale.created_at,
    }


class SalesLogger:
    """Service for logging sales transactions."""

    async def record_sale(self, db: Session, sale_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Record a new sale.

        Args:
            db: Database session
            sale_data: Dictionary containing sale information
                - platform: str
                - sale_type: Optional[str], ``online`` or ``wholesale``
                - wholesale_type: Optional[str], required for wholesale
                - payment_method: Optional[str], required for wholesale
                - buyer_store_id / buyer_store_name: Optional[str]
                - line_items: List[Dict] with product_id, product_name,
                  quantity, price_per_unit, size
                - date_sold: Optional[datetime], defaults to now
                - notes: Optional[str]

        Returns:
            Dict containing the created sale
        """
        platform = sale_data.get("platform")
        if not platform:
            raise ValueError("Platform is required")
        platform = _parse_enum(SalePlatform, platform, "platform")
        sale_type = _parse_enum(SaleType, sale_data.get("sale_type") or SaleType.ONLINE.value, "sale type")

        payment_method = sale_data.get("payment_method")
        wholesale_type = sale_data.get("wholesale_type")
        if sale_type == SaleType.WHOLESALE:
            if not payment_method:
                raise ValueError("Payment method is required for wholesale sales")
            if not wholesale_type:
                raise ValueError("Wholesale type is required for wholesale sales")

        line_items = sale_data.get("line_items")
        if not isinstance(line_items, list) or not line_items:
            raise ValueError("At least one line item is required")

        items = sanitize_line_items(line_items)
        if not items:
            raise ValueError("All line items are invalid")

        total_amount = sum(item["quantity"] * item["price_per_unit"] for item in items)

        sale = Sale(
            platform=platform,
            sale_type=sale_type,
            wholesale_type=_parse_enum(WholesaleType, wholesale_type, "wholesale type") if wholesale_type else None,
            buyer_store_id=sale_data.get("buyer_store_id"),
            buyer_store_name=sale_data.get("buyer_store_name"),
            payment_method=_parse_enum(PaymentMethod, payment_method, "payment method") if payment_method else None,
            line_items=items,
            total_amount=total_amount,
            notes=sale_data.get("notes") or "",
            date_sold=as_utc(sale_data.get("date_sold")) or utcnow(),
        )
        db.add(sale)
        db.commit()
        db.refresh(sale)

        logger.info(f"Sale recorded successfully: {sale.id} ({platform.value}, {total_amount:.2f})")
        return serialize_sale(sale)

    async def list_sales(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get sales, most recently sold first."""
        sales = db.query(Sale).order_by(
            Sale.date_sold.desc(),
            Sale.created_at.desc()
        ).limit(limit or settings.list_limit).all()
        return [serialize_sale(sale) for sale in sales]

    async def get_sales_summary(
        self,
        db: Session,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """Get sales summary for a date range, the last 30 days by default."""
        end_date = as_utc(end_date) or utcnow()
        start_date = as_utc(start_date) or end_date - timedelta(days=30)
        if start_date > end_date:
            raise ValueError("start_date must be before end_date")

        sales = db.query(Sale).filter(
            and_(
                Sale.date_sold >= start_date,
                Sale.date_sold <= end_date
            )
        ).all()

        total_sales = len(sales)
        total_revenue = sum(sale.total_amount or 0.0 for sale in sales)
        avg_transaction = total_revenue / total_sales if total_sales > 0 else 0.0

        revenue_by_platform: Dict[str, float] = {}
        products: Dict[str, Dict[str, Any]] = {}
        for sale in sales:
            platform = sale.platform.value
            revenue_by_platform[platform] = revenue_by_platform.get(platform, 0.0) + (sale.total_amount or 0.0)

            for item in sale.line_items or []:
                product = products.setdefault(item["product_id"], {
                    "product_id": item["product_id"],
                    "product_name": item["product_name"],
                    "total_quantity": 0,
                    "total_revenue": 0.0,
                })
                product["total_quantity"] += item["quantity"]
                product["total_revenue"] += item["quantity"] * item["price_per_unit"]

        top_products = sorted(products.values(), key=lambda p: p["total_quantity"], reverse=True)[:10]

        return {
            "start_date": start_date,
            "end_date": end_date,
            "total_sales": total_sales,
            "total_revenue": total_revenue,
            "average_transaction": avg_transaction,
            "revenue_by_platform": revenue_by_platform,
            "top_products": top_products,
        }
