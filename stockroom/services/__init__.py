"""
Business logic services for the Stockroom application.
"""

from .audit_logger import AuditLogger
from .product_catalog import ProductCatalog
from .inventory_monitor import InventoryMonitor
from .order_tracker import OrderTracker
from .sales_logger import SalesLogger
from .store_directory import StoreDirectory
from .expense_tracker import ExpenseTracker
from .task_board import TaskBoard
from .stats_reporter import StatsReporter
from .user_accounts import UserAccounts

__all__ = [
    "AuditLogger",
    "ProductCatalog",
    "InventoryMonitor",
    "OrderTracker",
    "SalesLogger",
    "StoreDirectory",
    "ExpenseTracker",
    "TaskBoard",
    "StatsReporter",
    "UserAccounts"
]
