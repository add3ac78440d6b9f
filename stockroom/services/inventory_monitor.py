"""
Inventory Monitor service for tracking per-size stock of products.
"""
import logging
import math
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import utcnow
from stockroom.core.exceptions import ConflictError, NotFoundError
from stockroom.models.inventory import Product, InventoryItem
from stockroom.services.audit_logger import AuditLogger

logger = logging.getLogger(__name__)

INVENTORY_CATEGORY = "inventory"


def clamp_quantity(value: Any) -> int:
    """Coerce a quantity to a non-negative integer. Negative, NaN and non-numeric input becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number) or number <= 0:
        return 0
    return int(number)


def sanitize_size_quantities(size_quantities: Optional[Dict[str, Any]]) -> Dict[str, int]:
    if not isinstance(size_quantities, dict):
        return {}
    return {str(size): clamp_quantity(quantity) for size, quantity in size_quantities.items()}


def diff_size_quantities(old: Dict[str, int], new: Dict[str, int]) -> List[str]:
    """
    Describe per-size quantity changes.

    Walks the sorted union of sizes; a size missing on either side counts
    as 0. Each change renders as ``"M: 1→3"``.
    """
    changes = []
    for size in sorted(set(old) | set(new)):
        previous = old.get(size, 0)
        current = new.get(size, 0)
        if previous != current:
            changes.append(f"{size}: {previous}→{current}")
    return changes


def describe_changes(old: Dict[str, int], new: Dict[str, int]) -> str:
    changes = diff_size_quantities(old, new)
    return ", ".join(changes) if changes else "No quantity changes"


def summarize_quantities(size_quantities: Dict[str, int]) -> str:
    """Render the sizes that still hold stock, e.g. ``"L: 1, S: 2"``."""
    in_stock = sorted((size, quantity) for size, quantity in size_quantities.items() if quantity > 0)
    if not in_stock:
        return "No quantities"
    return ", ".join(f"{size}: {quantity}" for size, quantity in in_stock)


class InventoryMonitor:
    """Service for adding, updating and removing products in inventory."""

    def __init__(self):
        self.audit_logger = AuditLogger()

    def _product_name(self, db: Session, product_id: str) -> str:
        product = db.query(Product).filter(Product.id == product_id).first()
        return product.name if product else f"Product {product_id}"

    def _get_item(self, db: Session, product_id: str) -> InventoryItem:
        item = db.query(InventoryItem).filter(InventoryItem.product_id == product_id).first()
        if not item:
            raise NotFoundError("Inventory item not found")
        return item

    async def list_inventory(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get inventory items with a summary of their product, newest first."""
        items = db.query(InventoryItem).order_by(InventoryItem.created_at.desc()).limit(
            limit or settings.list_limit
        ).all()
        if not items:
            return []

        products = db.query(Product).filter(Product.id.in_([item.product_id for item in items])).all()
        product_map = {product.id: product for product in products}

        inventory = []
        for item in items:
            product = product_map.get(item.product_id)
            if not product:
                # Product was deleted from the catalog
                continue
            inventory.append({
                "product_id": item.product_id,
                "size_quantities": item.size_quantities or {},
                "created_at": item.created_at,
                "updated_at": item.updated_at,
                "product": {
                    "id": product.id,
                    "name": product.name,
                    "image": product.image,
                    "image_back": product.image_back,
                    "brand": product.brand or "",
                    "category": product.category or "",
                    "type": product.type or product.name,
                    "colorway": product.colorway or "",
                    "product_code": product.product_code or "",
                    "sizes": product.sizes or [],
                },
            })
        return inventory

    async def add_product(self, db: Session, product_id: Optional[str]) -> Dict[str, Any]:
        """
        Start tracking a product in inventory.

        Quantities are seeded for every size of the product (or the default
        size run) from the quantities stored on the product itself.
        """
        if not product_id:
            raise ValueError("product_id is required")

        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product not found")

        existing = db.query(InventoryItem).filter(InventoryItem.product_id == product_id).first()
        if existing:
            raise ConflictError("Product is already in inventory")

        sizes = product.sizes or settings.default_sizes
        product_quantities = product.size_quantities or {}
        size_quantities = {size: clamp_quantity(product_quantities.get(size, 0)) for size in sizes}

        db.add(InventoryItem(product_id=product_id, size_quantities=size_quantities))
        product.in_inventory = True
        self.audit_logger.record(
            db,
            INVENTORY_CATEGORY,
            f'Added "{product.name}" to inventory',
            {"product_id": product_id, "product_name": product.name, "action": "added"}
        )
        db.commit()

        logger.info(f"Product {product_id} added to inventory")
        return {
            "product_id": product_id,
            "size_quantities": size_quantities,
            "message": "Added to inventory",
        }

    async def update_quantities(
        self,
        db: Session,
        product_id: str,
        size_quantities: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Replace the per-size quantities of one inventory item and log the diff."""
        if not isinstance(size_quantities, dict):
            raise ValueError("size_quantities object is required")

        item = self._get_item(db, product_id)
        product_name = self._product_name(db, product_id)

        new_quantities = sanitize_size_quantities(size_quantities)
        changes = describe_changes(item.size_quantities or {}, new_quantities)

        item.size_quantities = new_quantities
        item.updated_at = utcnow()
        self.audit_logger.record(
            db,
            INVENTORY_CATEGORY,
            f'Updated quantities for "{product_name}"',
            {"product_id": product_id, "product_name": product_name, "changes": changes}
        )
        db.commit()

        return {"product_id": product_id, "size_quantities": new_quantities}

    async def batch_update(self, db: Session, updates: Optional[List[Dict[str, Any]]]) -> int:
        """
        Update several inventory items with a single audit entry.

        Entries without a product id, without a quantities object, or for
        products not in inventory are skipped. Returns the number updated.
        """
        if not isinstance(updates, list) or not updates:
            raise ValueError("updates array with at least one item is required")

        now = utcnow()
        log_products = []
        for update in updates:
            if not isinstance(update, dict):
                continue
            product_id = update.get("product_id")
            size_quantities = update.get("size_quantities")
            if not product_id or not isinstance(size_quantities, dict):
                continue

            item = db.query(InventoryItem).filter(InventoryItem.product_id == product_id).first()
            if not item:
                continue

            product_name = self._product_name(db, product_id)
            new_quantities = sanitize_size_quantities(size_quantities)
            changes = describe_changes(item.size_quantities or {}, new_quantities)

            item.size_quantities = new_quantities
            item.updated_at = now
            log_products.append({"product_name": product_name, "changes": changes})

        if log_products:
            count = len(log_products)
            if count == 1:
                message = f'Updated quantities for "{log_products[0]["product_name"]}"'
            else:
                message = f"Updated {count} products"
            self.audit_logger.record(
                db,
                INVENTORY_CATEGORY,
                message,
                {"product_count": count, "products": log_products}
            )
        db.commit()

        return len(log_products)

    async def remove_product(self, db: Session, product_id: str) -> None:
        """Stop tracking a product, logging the stock it still held."""
        item = self._get_item(db, product_id)
        product = db.query(Product).filter(Product.id == product_id).first()
        product_name = product.name if product else f"Product {product_id}"

        size_quantities = item.size_quantities or {}
        summary = summarize_quantities(size_quantities)

        db.delete(item)
        if product:
            product.in_inventory = False
        self.audit_logger.record(
            db,
            INVENTORY_CATEGORY,
            f'Removed "{product_name}" from inventory',
            {
                "product_id": product_id,
                "product_name": product_name,
                "action": "removed",
                "size_quantities": size_quantities,
                "sizes_and_quantities_summary": summary,
            }
        )
        db.commit()
        logger.info(f"Product {product_id} removed from inventory")
