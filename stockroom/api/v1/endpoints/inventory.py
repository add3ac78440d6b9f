"""
Inventory API endpoints for tracking per-size stock.
"""
from typing import List, Dict, Any, Optional
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.inventory_monitor import InventoryMonitor

router = APIRouter()
inventory_monitor = InventoryMonitor()


class InventoryAddRequest(BaseModel):
    """Request model for adding a product to inventory."""
    product_id: Optional[str] = Field(None, description="Product ID")


class QuantitiesUpdateRequest(BaseModel):
    """Request model for replacing an item's per-size quantities."""
    size_quantities: Optional[Dict[str, Any]] = Field(None, description="Quantity per size")


class BatchUpdateRequest(BaseModel):
    """Request model for updating several inventory items at once."""
    updates: Optional[List[Any]] = Field(
        None,
        description="List of {product_id, size_quantities} entries"
    )


@router.get("")
async def get_inventory(db: Session = Depends(get_db)):
    """
    Get all inventory items.

    Each item carries a summary of its product; items whose product has been
    deleted are left out.
    """
    return await inventory_monitor.list_inventory(db)


@router.post("", status_code=201)
async def add_to_inventory(request: InventoryAddRequest, db: Session = Depends(get_db)):
    """Start tracking a product, seeding quantities from the product's sizes."""
    try:
        return await inventory_monitor.add_product(db, request.product_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("")
async def batch_update_inventory(request: BatchUpdateRequest, db: Session = Depends(get_db)):
    """
    Update quantities of several inventory items.

    Entries for products not in inventory are skipped.
    """
    try:
        updated = await inventory_monitor.batch_update(db, request.updates)
        return {"message": "Inventory updated", "updated": updated}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{product_id}")
async def update_inventory_item(
    product_id: str,
    request: QuantitiesUpdateRequest,
    db: Session = Depends(get_db)
):
    try:
        return await inventory_monitor.update_quantities(db, product_id, request.size_quantities)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{product_id}")
async def remove_from_inventory(product_id: str, db: Session = Depends(get_db)):
    """Stop tracking a product in inventory."""
    await inventory_monitor.remove_product(db, product_id)
    return {"message": "Removed from inventory"}
