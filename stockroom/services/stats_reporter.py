"""
Stats Reporter service for the dashboard statistics.
"""
import logging
from typing import Dict, Any
from sqlalchemy import func
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.redis_client import cache_manager
from stockroom.models.inventory import Product
from stockroom.models.orders import Order

logger = logging.getLogger(__name__)

STATS_CACHE_KEY = "stats:dashboard"


class StatsReporter:
    """Service for computing and caching dashboard statistics."""

    def __init__(self):
        self.cache = cache_manager

    def compute(self, db: Session) -> Dict[str, Any]:
        """
        Compute statistics from the database.

        Products bought sums the numeric quantities of every order line;
        suppliers are counted by exact trimmed name.
        """
        total_products = db.query(func.count(Product.id)).scalar() or 0
        orders = db.query(Order.products, Order.total_order_amount, Order.supplier).all()

        products_bought = 0
        total_spent = 0.0
        supplier_counts: Dict[str, int] = {}
        for products, total_order_amount, supplier in orders:
            for line in products or []:
                quantity = line.get("quantity") if isinstance(line, dict) else None
                if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
                    products_bought += quantity
            if total_order_amount:
                total_spent += total_order_amount
            if supplier and supplier.strip():
                name = supplier.strip()
                supplier_counts[name] = supplier_counts.get(name, 0) + 1

        top_suppliers = sorted(
            ({"name": name, "count": count} for name, count in supplier_counts.items()),
            key=lambda supplier: supplier["count"],
            reverse=True
        )[:settings.top_suppliers_count]

        return {
            "total_products": total_products,
            "total_orders": len(orders),
            "products_bought": products_bought,
            "total_spent": total_spent,
            "top_suppliers": top_suppliers,
        }

    async def get_stats(self, db: Session) -> Dict[str, Any]:
        """Get statistics, served from cache when fresh."""
        cached = self.cache.get(STATS_CACHE_KEY)
        if cached is not None:
            return cached
        return await self.refresh(db)

    async def refresh(self, db: Session) -> Dict[str, Any]:
        """Recompute statistics and store them in the cache."""
        stats = self.compute(db)
        self.cache.set(STATS_CACHE_KEY, stats, ttl=settings.stats_cache_ttl)
        logger.info(f"Stats refreshed: {stats['total_products']} products, {stats['total_orders']} orders")
        return stats

    def invalidate(self) -> None:
        """Drop cached statistics after a product or order write."""
        self.cache.delete(STATS_CACHE_KEY)
