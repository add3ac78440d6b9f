"""
Order API endpoints for purchase orders from suppliers.
"""
from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.order_tracker import OrderTracker

router = APIRouter()
order_tracker = OrderTracker()


class OrderLineRequest(BaseModel):
    """Request model for one order line."""
    product_id: Optional[str] = Field(None, description="Product ID")
    product_name: Optional[str] = Field(None, description="Product name at time of ordering")
    size: Optional[str] = Field(None, description="Size ordered")
    quantity: Optional[int] = Field(None, description="Quantity ordered")
    price: Optional[float] = Field(None, description="Unit price; null or negative means unknown")
    arrived_quantity: Optional[int] = Field(None, description="Quantity received so far")


class TrackingLinkRequest(BaseModel):
    url: Optional[str] = Field(None, description="Tracking URL")
    notes: Optional[str] = Field(None, description="Notes for this shipment")
    arrival_date: Optional[datetime] = Field(None, description="Arrival date of this shipment")


class OrderRequest(BaseModel):
    """Request model for creating or replacing an order."""
    products: Optional[List[OrderLineRequest]] = Field(None, description="Order lines")
    date: Optional[datetime] = Field(None, description="Order date")
    payment_method: Optional[str] = Field(None, description="Payment method")
    total_item_count: Optional[int] = Field(None, ge=0, description="Item count, defaults to the sum of line quantities")
    supplier: Optional[str] = Field(None, description="Supplier")
    notes: Optional[str] = Field(None, description="Additional notes")
    total_order_amount: Optional[float] = Field(None, description="Amount paid for the whole order")
    fees_and_shipping: Optional[float] = Field(None, description="Fees and shipping, derived when omitted")
    product_cost: Optional[float] = Field(None, description="Product cost, derived when omitted")
    carrier: Optional[str] = Field(None, description="Shipping carrier")
    ship_start_date: Optional[datetime] = Field(None, description="Date the order shipped")
    ship_arrival_date: Optional[datetime] = Field(None, description="Date the order arrived")
    tracking_links: Optional[List[TrackingLinkRequest]] = Field(None, description="Shipment tracking links")


@router.get("")
async def list_orders(db: Session = Depends(get_db)):
    """Get all orders, newest first."""
    return await order_tracker.list_orders(db)


@router.post("", status_code=201)
async def create_order(order: OrderRequest, db: Session = Depends(get_db)):
    """
    Create a new purchase order.

    Line and order statuses, the item count and the cost breakdown are
    derived from the lines.
    """
    try:
        return await order_tracker.create_order(db, order.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{order_id}")
async def get_order(order_id: str, db: Session = Depends(get_db)):
    return await order_tracker.get_order(db, order_id)


@router.put("/{order_id}")
async def update_order(order_id: str, order: OrderRequest, db: Session = Depends(get_db)):
    """Replace an order's details and re-derive its status."""
    try:
        return await order_tracker.update_order(db, order_id, order.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{order_id}")
async def delete_order(order_id: str, db: Session = Depends(get_db)):
    await order_tracker.delete_order(db, order_id)
    return {"message": "Order deleted successfully"}
