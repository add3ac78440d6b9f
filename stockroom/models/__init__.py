"""
Database models for the Stockroom application.
"""

from .inventory import Product, InventoryItem
from .orders import Order, OrderStatus
from .sales import Sale, Store, SalePlatform, PaymentMethod, SaleType, WholesaleType, StoreType
from .expenses import Expense, RecurringInterval
from .tasks import Task, TaskStatus, TaskPriority
from .logs import LogEntry
from .users import User

__all__ = [
    "Product", "InventoryItem",
    "Order", "OrderStatus",
    "Sale", "Store", "SalePlatform", "PaymentMethod", "SaleType", "WholesaleType", "StoreType",
    "Expense", "RecurringInterval",
    "Task", "TaskStatus", "TaskPriority",
    "LogEntry",
    "User"
]
