"""
Main API router for v1 endpoints.
"""
from fastapi import APIRouter, Depends

from stockroom.core.security import get_current_user
from stockroom.api.v1.endpoints import (
    auth, products, inventory, orders, sales, stores, expenses, tasks, logs, stats
)

api_router = APIRouter()

# Everything except auth requires a signed-in session
protected = [Depends(get_current_user)]

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["products"], dependencies=protected)
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"], dependencies=protected)
api_router.include_router(orders.router, prefix="/orders", tags=["orders"], dependencies=protected)
api_router.include_router(sales.router, prefix="/sales", tags=["sales"], dependencies=protected)
api_router.include_router(stores.router, prefix="/stores", tags=["stores"], dependencies=protected)
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"], dependencies=protected)
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"], dependencies=protected)
api_router.include_router(logs.router, prefix="/logs", tags=["logs"], dependencies=protected)
api_router.include_router(stats.router, prefix="/stats", tags=["stats"], dependencies=protected)
