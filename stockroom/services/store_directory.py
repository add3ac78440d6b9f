"""
Store Directory service for wholesale buyers.
"""
import logging
from typing import List, Dict, Any, Optional
from sqlalchemy.orm import Session

from stockroom.core.config import settings
from stockroom.models.sales import Store, StoreType

logger = logging.getLogger(__name__)


def serialize_store(store: Store) -> Dict[str, Any]:
    return {
        "id": store.id,
        "name": store.name,
        "type": store.type.value,
        "created_at": store.created_at,
    }


class StoreDirectory:
    """Service for the stores, resellers and international buyers sold to wholesale."""

    async def list_stores(self, db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get all stores sorted by name."""
        stores = db.query(Store).order_by(Store.name.asc()).limit(limit or settings.list_limit).all()
        return [serialize_store(store) for store in stores]

    async def create_store(self, db: Session, name: Optional[str], store_type: Optional[str] = None) -> Dict[str, Any]:
        """Create a store; an unknown type falls back to ``Store``."""
        if not name or not name.strip():
            raise ValueError("Name is required")

        try:
            resolved_type = StoreType(store_type)
        except ValueError:
            resolved_type = StoreType.STORE

        store = Store(name=name.strip(), type=resolved_type)
        db.add(store)
        db.commit()
        db.refresh(store)

        logger.info(f"Store created: {store.id} ({store.name}, {resolved_type.value})")
        return serialize_store(store)
