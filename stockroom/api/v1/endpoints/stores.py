"""
Store API endpoints for wholesale buyers.
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.store_directory import StoreDirectory

router = APIRouter()
store_directory = StoreDirectory()


class StoreRequest(BaseModel):
    name: Optional[str] = Field(None, description="Store name")
    type: Optional[str] = Field(None, description="Store, Reseller or International")


@router.get("")
async def list_stores(db: Session = Depends(get_db)):
    """Get all stores sorted by name."""
    return await store_directory.list_stores(db)


@router.post("", status_code=201)
async def create_store(store: StoreRequest, db: Session = Depends(get_db)):
    try:
        return await store_directory.create_store(db, store.name, store.type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
