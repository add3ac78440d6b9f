"""
Product API endpoints for the product catalog.
"""
from typing import List, Dict, Any, Optional
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from stockroom.core.database import get_db
from stockroom.services.product_catalog import ProductCatalog

router = APIRouter()
product_catalog = ProductCatalog()


class ProductRequest(BaseModel):
    """Request model for creating or replacing a product."""
    name: Optional[str] = Field(None, description="Unique product name")
    image: Optional[str] = Field(None, description="Front image URL")
    image_back: Optional[str] = Field(None, description="Back image URL")
    brand: Optional[str] = Field(None, description="Brand")
    category: Optional[str] = Field(None, description="Category")
    type: Optional[str] = Field(None, description="Product type, defaults to the name")
    colorway: Optional[str] = Field(None, description="Colorway")
    product_code: Optional[str] = Field(None, description="Manufacturer product code")
    sizes: Optional[List[str]] = Field(None, description="Sizes the product comes in")
    size_quantities: Optional[Dict[str, Any]] = Field(None, description="Quantity per size")


class ProductPatchRequest(BaseModel):
    """Request model for patching product quantities or inventory flag."""
    size_quantities: Optional[Dict[str, Any]] = Field(None, description="Quantity per size")
    in_inventory: Optional[bool] = Field(None, description="Whether the product is tracked in inventory")


@router.get("")
async def list_products(db: Session = Depends(get_db)):
    """Get all products, newest first."""
    return await product_catalog.list_products(db)


@router.post("", status_code=201)
async def create_product(product: ProductRequest, db: Session = Depends(get_db)):
    """
    Create a new product.

    ``name`` and ``image`` are required and the name must be unique.
    """
    try:
        return await product_catalog.create_product(db, product.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{product_id}")
async def get_product(product_id: str, db: Session = Depends(get_db)):
    return await product_catalog.get_product(db, product_id)


@router.put("/{product_id}")
async def update_product(product_id: str, product: ProductRequest, db: Session = Depends(get_db)):
    """
    Replace a product's details.

    Optional fields left out of the body keep their stored values.
    """
    try:
        return await product_catalog.update_product(db, product_id, product.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{product_id}")
async def patch_product(product_id: str, patch: ProductPatchRequest, db: Session = Depends(get_db)):
    """Update a product's quantities and/or in-inventory flag."""
    try:
        return await product_catalog.patch_product(
            db,
            product_id,
            size_quantities=patch.size_quantities,
            in_inventory=patch.in_inventory
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{product_id}")
async def delete_product(product_id: str, db: Session = Depends(get_db)):
    await product_catalog.delete_product(db, product_id)
    return {"message": "Product deleted successfully"}
