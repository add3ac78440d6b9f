"""
Order Tracker service for purchase orders and their arrival status.
"""
import logging
import math
from typing import List, Dict, Any, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import as_utc, utcnow
from stockroom.core.exceptions import ConflictError, NotFoundError
from stockroom.models.orders import Order, OrderStatus
from stockroom.services.audit_logger import AuditLogger
from stockroom.services.inventory_monitor import clamp_quantity
from stockroom.services.stats_reporter import StatsReporter

logger = logging.getLogger(__name__)

ORDERS_CATEGORY = "orders"


def normalize_status(raw: Optional[str]) -> OrderStatus:
    """Read a stored status; the legacy ``ARRIVED`` maps to COMPLETED, anything unknown to SHIPPING."""
    if raw == "ARRIVED":
        return OrderStatus.COMPLETED
    try:
        return OrderStatus(raw)
    except ValueError:
        return OrderStatus.SHIPPING


def normalize_price(value: Any) -> Optional[float]:
    """Unit price, or None when unknown (missing, NaN, negative such as the legacy -1)."""
    if value is None:
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(price) or math.isinf(price) or price < 0:
        return None
    return price


def product_status(ordered: int, arrived: int) -> OrderStatus:
    """Status of one product from its summed ordered and arrived quantities."""
    if arrived == 0:
        return OrderStatus.SHIPPING
    if arrived == ordered and ordered > 0:
        return OrderStatus.COMPLETED
    if arrived < ordered:
        return OrderStatus.PARTIALLY_ARRIVED
    return OrderStatus.COMPLETED


def order_status(statuses: List[OrderStatus]) -> OrderStatus:
    """Roll product statuses up to the order."""
    if not statuses:
        return OrderStatus.SHIPPING
    if all(status == OrderStatus.COMPLETED for status in statuses):
        return OrderStatus.COMPLETED
    if all(status == OrderStatus.SHIPPING for status in statuses):
        return OrderStatus.SHIPPING
    return OrderStatus.PARTIALLY_ARRIVED


def sanitize_line(line: Dict[str, Any]) -> Dict[str, Any]:
    quantity = clamp_quantity(line.get("quantity"))
    arrived = min(clamp_quantity(line.get("arrived_quantity")), quantity)
    return {
        "product_id": line.get("product_id"),
        "product_name": line.get("product_name") or "",
        "size": line.get("size") or "",
        "quantity": quantity,
        "price": normalize_price(line.get("price")),
        "arrived_quantity": arrived,
    }


def apply_statuses(lines: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], OrderStatus]:
    """
    Derive line and order statuses.

    Lines are grouped by product; every line takes the status of its
    product's summed quantities. Returns the updated lines and the order
    status.
    """
    totals: Dict[Any, List[int]] = {}
    for line in lines:
        ordered_arrived = totals.setdefault(line["product_id"], [0, 0])
        ordered_arrived[0] += line["quantity"]
        ordered_arrived[1] += line["arrived_quantity"]

    statuses = {
        product_id: product_status(ordered, arrived)
        for product_id, (ordered, arrived) in totals.items()
    }
    for line in lines:
        line["status"] = statuses[line["product_id"]].value

    return lines, order_status(list(statuses.values()))


def compute_costs(
    lines: List[Dict[str, Any]],
    total_order_amount: Optional[float]
) -> Tuple[Optional[float], Optional[float]]:
    """
    Product cost and fees/shipping of an order.

    Any line with stock but no known price makes both unknown. Fees are
    what the order total leaves after product cost, never negative, and 0
    when no total was given.
    """
    stocked = [line for line in lines if line["quantity"] > 0]
    if any(line["price"] is None for line in stocked):
        return None, None

    product_cost = sum(line["price"] * line["quantity"] for line in stocked)
    if not total_order_amount:
        return product_cost, 0.0
    return product_cost, max(total_order_amount - product_cost, 0.0)


def _serialize_links(links: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    serialized = []
    for link in links or []:
        url = (link.get("url") or "").strip()
        if not url:
            continue
        arrival_date = as_utc(link.get("arrival_date"))
        serialized.append({
            "url": url,
            "notes": link.get("notes") or "",
            "arrival_date": arrival_date.isoformat() if arrival_date else None,
        })
    return serialized


def serialize_order(order: Order) -> Dict[str, Any]:
    products = []
    for line in order.products or []:
        products.append({**line, "status": normalize_status(line.get("status")).value})

    return {
        "id": order.id,
        "order_number": order.order_number,
        "products": products,
        "date": order.date,
        "payment_method": order.payment_method,
        "total_item_count": order.total_item_count or 0,
        "supplier": order.supplier,
        "notes": order.notes,
        "total_order_amount": order.total_order_amount,
        "fees_and_shipping": order.fees_and_shipping,
        "product_cost": order.product_cost,
        "carrier": order.carrier,
        "ship_start_date": order.ship_start_date,
        "ship_arrival_date": order.ship_arrival_date,
        "tracking_links": order.tracking_links or [],
        "status": normalize_status(order.status).value,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


class OrderTracker:
    """Service for recording purchase orders and tracking their arrival."""

    def __init__(self):
        self.audit_logger = AuditLogger()
        self.stats_reporter = StatsReporter()

    def _validate(self, data: Dict[str, Any]) -> None:
        products = data.get("products")
        if not isinstance(products, list) or not products:
            raise ValueError("At least one product is required")
        if not data.get("date"):
            raise ValueError("Date is required")
        if not data.get("payment_method"):
            raise ValueError("Payment method is required")
        for line in products:
            if not line.get("product_id"):
                raise ValueError("Every product line needs a product_id")

    def _get(self, db: Session, order_id: str) -> Order:
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order not found")
        return order

    def _apply(self, order: Order, data: Dict[str, Any]) -> None:
        """Write validated fields and the derived totals and statuses onto an order."""
        lines, status = apply_statuses([sanitize_line(line) for line in data["products"]])
        total_order_amount = data.get("total_order_amount")
        product_cost, fees_and_shipping = compute_costs(lines, total_order_amount)

        order.products = lines
        order.total_item_count = data.get("total_item_count") or sum(line["quantity"] for line in lines)
        order.date = as_utc(data["date"])
        order.payment_method = data["payment_method"]
        order.supplier = data.get("supplier") or None
        order.notes = data.get("notes") or None
        order.total_order_amount = total_order_amount
        order.product_cost = data["product_cost"] if data.get("product_cost") is not None else product_cost
        order.fees_and_shipping = (
            data["fees_and_shipping"] if data.get("fees_and_shipping") is not None else fees_and_shipping
        )
        order.carrier = data.get("carrier") or None
        order.ship_start_date = as_utc(data.get("ship_start_date"))
        order.ship_arrival_date = as_utc(data.get("ship_arrival_date"))
        order.tracking_links = _serialize_links(data.get("tracking_links"))
        order.status = status.value

    async def list_orders(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get all orders, newest first."""
        orders = db.query(Order).order_by(Order.created_at.desc()).limit(limit or settings.list_limit).all()
        return [serialize_order(order) for order in orders]

    async def get_order(self, db: Session, order_id: str) -> Dict[str, Any]:
        return serialize_order(self._get(db, order_id))

    def _next_order_number(self, db: Session) -> int:
        last_number = db.query(func.max(Order.order_number)).scalar()
        return (last_number or 0) + 1

    async def create_order(self, db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Record a new purchase order.

        The order number continues from the highest existing one; statuses,
        item count and costs are derived from the lines. A number taken by a
        concurrent create is retried once before giving up with a conflict.
        """
        self._validate(data)

        for attempt in range(2):
            order = Order(order_number=self._next_order_number(db))
            self._apply(order, data)
            db.add(order)
            try:
                db.commit()
                break
            except IntegrityError:
                db.rollback()
                logger.warning(f"Order number {order.order_number} already taken (attempt {attempt + 1})")
        else:
            raise ConflictError("Order number already taken, please retry")

        db.refresh(order)
        self.stats_reporter.invalidate()

        logger.info(f"Order #{order.order_number} created with {len(order.products)} lines")
        return serialize_order(order)

    async def update_order(self, db: Session, order_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Replace an order's details, logging a change of arrival status."""
        self._validate(data)
        order = self._get(db, order_id)

        previous_status = normalize_status(order.status)
        self._apply(order, data)
        order.updated_at = utcnow()

        if order.status != previous_status.value:
            self.audit_logger.record(
                db,
                ORDERS_CATEGORY,
                f"Order #{order.order_number} is now {order.status}",
                {
                    "order_id": order.id,
                    "order_number": order.order_number,
                    "previous_status": previous_status.value,
                    "status": order.status,
                }
            )

        db.commit()
        db.refresh(order)
        self.stats_reporter.invalidate()
        return serialize_order(order)

    async def delete_order(self, db: Session, order_id: str) -> None:
        order = self._get(db, order_id)
        db.delete(order)
        db.commit()
        self.stats_reporter.invalidate()
        logger.info(f"Order {order_id} deleted")
