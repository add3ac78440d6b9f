"""
Product Catalog service for managing the products the business carries.
"""
import logging
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.core.database import utcnow
from stockroom.core.exceptions import ConflictError, NotFoundError
from stockroom.models.inventory import Product
from stockroom.services.inventory_monitor import sanitize_size_quantities
from stockroom.services.stats_reporter import StatsReporter

logger = logging.getLogger(__name__)


def serialize_product(product: Product) -> Dict[str, Any]:
    return {
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
        "size_quantities": product.size_quantities or {},
        "in_inventory": bool(product.in_inventory),
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


class ProductCatalog:
    """Service for creating, editing and removing catalog products."""

    def __init__(self):
        self.stats_reporter = StatsReporter()

    def _require_name_and_image(self, data: Dict[str, Any]) -> None:
        if not data.get("name") or not data.get("image"):
            raise ValueError("Name and image are required")

    def _get(self, db: Session, product_id: str) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product not found")
        return product

    def _check_unique_name(self, db: Session, name: str, exclude_id: Optional[str] = None) -> None:
        query = db.query(Product).filter(Product.name == name)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        if query.first():
            raise ConflictError("A product with this name already exists")

    async def list_products(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get all products, newest first."""
        products = db.query(Product).order_by(Product.created_at.desc()).limit(limit or settings.list_limit).all()
        return [serialize_product(product) for product in products]

    async def get_product(self, db: Session, product_id: str) -> Dict[str, Any]:
        return serialize_product(self._get(db, product_id))

    async def create_product(self, db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new product.

        Args:
            db: Database session
            data: Product fields; ``name`` and ``image`` are required and
                ``type`` falls back to the name.

        Returns:
            The created product
        """
        self._require_name_and_image(data)
        name = data["name"]
        self._check_unique_name(db, name)

        product = Product(
            name=name,
            image=data["image"],
            image_back=data.get("image_back") or None,
            brand=data.get("brand") or "",
            category=data.get("category") or "",
            type=data.get("type") or name,
            colorway=data.get("colorway") or "",
            product_code=data.get("product_code") or "",
            sizes=list(data.get("sizes") or []),
            size_quantities=sanitize_size_quantities(data.get("size_quantities")),
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        self.stats_reporter.invalidate()

        logger.info(f"Product created: {product.id} ({name})")
        return serialize_product(product)

    async def update_product(self, db: Session, product_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace a product's details.

        ``name``, ``image`` and ``sizes`` are always written; the remaining
        fields are only touched when present in ``data``.
        """
        self._require_name_and_image(data)
        name = data["name"]
        self._check_unique_name(db, name, exclude_id=product_id)
        product = self._get(db, product_id)

        product.name = name
        product.image = data["image"]
        product.sizes = list(data.get("sizes") or [])
        if "image_back" in data:
            product.image_back = data["image_back"] or None
        if "brand" in data:
            product.brand = data["brand"] or ""
        if "category" in data:
            product.category = data["category"] or ""
        if "type" in data:
            product.type = data["type"] or name
        if "colorway" in data:
            product.colorway = data["colorway"] or ""
        if "product_code" in data:
            product.product_code = data["product_code"] or ""
        if isinstance(data.get("size_quantities"), dict):
            product.size_quantities = sanitize_size_quantities(data["size_quantities"])
        product.updated_at = utcnow()

        db.commit()
        db.refresh(product)
        return serialize_product(product)

    async def patch_product(
        self,
        db: Session,
        product_id: str,
        size_quantities: Optional[Dict[str, Any]] = None,
        in_inventory: Optional[bool] = None
    ) -> Dict[str, Any]:
        """Update a product's own quantities and/or its in-inventory flag."""
        if not isinstance(size_quantities, dict) and in_inventory is None:
            raise ValueError("Provide size_quantities and/or in_inventory")

        product = self._get(db, product_id)
        if isinstance(size_quantities, dict):
            product.size_quantities = sanitize_size_quantities(size_quantities)
        if in_inventory is not None:
            product.in_inventory = in_inventory
        product.updated_at = utcnow()
        db.commit()

        return {
            "id": product_id,
            "size_quantities": product.size_quantities,
            "in_inventory": product.in_inventory,
        }

    async def delete_product(self, db: Session, product_id: str) -> None:
        product = self._get(db, product_id)
        db.delete(product)
        db.commit()
        self.stats_reporter.invalidate()
        logger.info(f"Product deleted: {product_id}")
