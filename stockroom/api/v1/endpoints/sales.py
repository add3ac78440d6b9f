"""
Sales API endpoints for recording sales and retrieving sales data.
"""
from typing import List, Any, Optional
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.sales_logger import SalesLogger

router = APIRouter()
sales_logger = SalesLogger()


class SaleItemRequest(BaseModel):
    """Request model for sale item."""
    product_id: Optional[str] = Field(None, description="Product ID")
    product_name: Optional[str] = Field(None, description="Product name")
    quantity: Any = Field(None, description="Quantity sold")
    price_per_unit: Any = Field(None, description="Unit price")
    size: Optional[str] = Field(None, description="Size sold")


class SaleRequest(BaseModel):
    """Request model for recording a sale."""
    platform: Optional[str] = Field(None, description="Platform (Depop, Ebay, Poshmark, ..., Store, Reseller, International)")
    sale_type: Optional[str] = Field(None, description="online or wholesale, defaults to online")
    wholesale_type: Optional[str] = Field(None, description="Physical, Store or International; required for wholesale")
    payment_method: Optional[str] = Field(None, description="Payment method; required for wholesale")
    buyer_store_id: Optional[str] = Field(None, description="Store ID of the wholesale buyer")
    buyer_store_name: Optional[str] = Field(None, description="Store name of the wholesale buyer")
    line_items: Optional[List[SaleItemRequest]] = Field(None, description="Sale items")
    date_sold: Optional[datetime] = Field(None, description="Date of sale, defaults to now")
    notes: Optional[str] = Field(None, description="Additional notes")


@router.get("")
async def list_sales(db: Session = Depends(get_db)):
    """Get all sales, most recently sold first."""
    return await sales_logger.list_sales(db)


@router.post("", status_code=201)
async def record_sale(sale_data: SaleRequest, db: Session = Depends(get_db)):
    """
    Record a new sale.

    Unusable line items are dropped and the total is computed from the rest.
    """
    try:
        return await sales_logger.record_sale(db, sale_data.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/summary")
async def get_sales_summary(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db)
):
    """
    Get sales summary for a date range.

    Returns sale count, revenue, average sale, revenue per platform and the
    top selling products. Defaults to the last 30 days.
    """
    try:
        return await sales_logger.get_sales_summary(db, start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
