#!/usr/bin/env python3
"""
Sample data population script for Stockroom.
Creates sample products, inventory, orders, sales, stores and expenses through
the service layer, so derived fields and audit entries match real usage.
"""
import asyncio
import os
import random
import sys
from datetime import timedelta

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from stockroom.core.database import get_db_context, init_db, utcnow
from stockroom.core.exceptions import ConflictError
from stockroom.services.expense_tracker import ExpenseTracker
from stockroom.services.inventory_monitor import InventoryMonitor
from stockroom.services.order_tracker import OrderTracker
from stockroom.services.product_catalog import ProductCatalog
from stockroom.services.sales_logger import SalesLogger
from stockroom.services.store_directory import StoreDirectory

SAMPLE_PRODUCTS = [
    {
        "name": "Essentials Hoodie Oatmeal",
        "image": "https://images.example.com/essentials-hoodie-oatmeal.jpg",
        "brand": "Fear of God",
        "category": "Hoodies",
        "colorway": "Oatmeal",
        "sizes": ["XS", "S", "M", "L", "XL"],
    },
    {
        "name": "Box Logo Tee White",
        "image": "https://images.example.com/box-logo-tee-white.jpg",
        "brand": "Supreme",
        "category": "T-Shirts",
        "colorway": "White",
        "sizes": ["S", "M", "L"],
    },
    {
        "name": "Nuptse Jacket Black",
        "image": "https://images.example.com/nuptse-black.jpg",
        "brand": "The North Face",
        "category": "Outerwear",
        "colorway": "Black",
        "sizes": ["S", "M", "L", "XL"],
    },
    {
        "name": "Tech Fleece Joggers Grey",
        "image": "https://images.example.com/tech-fleece-grey.jpg",
        "brand": "Nike",
        "category": "Pants",
        "colorway": "Dark Grey Heather",
    },
]

SAMPLE_STORES = [
    ("Corner Consignment", "Store"),
    ("Resell Bros", "Reseller"),
    ("Tokyo Vintage Import", "International"),
]

SUPPLIERS = ["Wholesale Hub", "Outlet Direct", "Liquidation Co"]


async def create_sample_products(db):
    """Create sample products and track them in inventory."""
    product_catalog = ProductCatalog()
    inventory_monitor = InventoryMonitor()

    products = []
    for product_data in SAMPLE_PRODUCTS:
        sizes = product_data.get("sizes") or []
        product_data = {
            **product_data,
            "size_quantities": {size: random.randint(0, 6) for size in sizes},
        }
        try:
            product = await product_catalog.create_product(db, product_data)
        except ConflictError:
            print(f"Product {product_data['name']} already exists, skipping...")
            continue

        await inventory_monitor.add_product(db, product["id"])
        products.append(product)
        print(f"Created product: {product['name']}")

    print(f"Created {len(products)} sample products")
    return products


async def create_sample_orders(db, products):
    """Create purchase orders in different arrival states."""
    order_tracker = OrderTracker()
    now = utcnow()

    for i in range(6):
        lines = []
        for product in random.sample(products, k=min(2, len(products))):
            sizes = product["sizes"] or ["M"]
            quantity = random.randint(1, 5)
            lines.append({
                "product_id": product["id"],
                "product_name": product["name"],
                "size": random.choice(sizes),
                "quantity": quantity,
                "price": round(random.uniform(15, 90), 2) if i % 4 else None,
                "arrived_quantity": random.choice([0, quantity, quantity // 2]),
            })

        await order_tracker.create_order(db, {
            "products": lines,
            "date": now - timedelta(days=random.randint(1, 60)),
            "payment_method": random.choice(["Zelle", "Cash", "Card"]),
            "supplier": random.choice(SUPPLIERS),
            "total_order_amount": round(random.uniform(100, 400), 2),
            "carrier": random.choice(["UPS", "USPS", "FedEx"]),
        })

    print("Created 6 sample orders")


async def create_sample_sales(db, products, stores):
    """Create online and wholesale sales over the last 30 days."""
    sales_logger = SalesLogger()
    now = utcnow()

    total_sales = 0
    for day in range(30):
        for _ in range(random.randint(0, 3)):
            product = random.choice(products)
            sale_data = {
                "platform": random.choice(["Depop", "Ebay", "Poshmark", "Vinted", "Mercari"]),
                "payment_method": None,
                "line_items": [{
                    "product_id": product["id"],
                    "product_name": product["name"],
                    "quantity": random.randint(1, 2),
                    "price_per_unit": round(random.uniform(30, 150), 2),
                    "size": random.choice(product["sizes"] or ["M"]),
                }],
                "date_sold": now - timedelta(days=day, hours=random.randint(0, 23)),
            }
            if stores and random.random() < 0.2:
                store = random.choice(stores)
                sale_data.update({
                    "platform": store["type"],
                    "sale_type": "wholesale",
                    "wholesale_type": "International" if store["type"] == "International" else "Store",
                    "payment_method": random.choice(["Zelle", "Cash"]),
                    "buyer_store_id": store["id"],
                    "buyer_store_name": store["name"],
                })

            await sales_logger.record_sale(db, sale_data)
            total_sales += 1

    print(f"Created {total_sales} sample sales over the last 30 days")


async def create_sample_stores(db):
    store_directory = StoreDirectory()
    stores = [await store_directory.create_store(db, name, store_type) for name, store_type in SAMPLE_STORES]
    print(f"Created {len(stores)} sample stores")
    return stores


async def create_sample_expenses(db):
    """Create one-time and recurring expenses."""
    expense_tracker = ExpenseTracker()
    now = utcnow()

    for item, cost, quantity in [("Poly mailers", 24.99, 100), ("Packing tape", 12.5, 6), ("Poly mailers", 22.0, 100)]:
        await expense_tracker.create_expense(db, {
            "date": now - timedelta(days=random.randint(1, 90)),
            "item": item,
            "cost": cost,
            "quantity": quantity,
        })

    await expense_tracker.create_expense(db, {
        "item": "Storage unit",
        "cost": 140.0,
        "is_recurring": True,
        "recurring_interval": "months",
        "recurring_every": 1,
        "start_date": now - timedelta(days=120),
    })
    print("Created 4 sample expenses")


async def main():
    """Main function to populate sample data."""
    print("Stockroom Sample Data Population")
    print("=" * 40)

    init_db()

    with get_db_context() as db:
        products = await create_sample_products(db)
        if not products:
            print("No new products created; leaving existing data untouched.")
            return
        stores = await create_sample_stores(db)
        await create_sample_orders(db, products)
        await create_sample_sales(db, products, stores)
        await create_sample_expenses(db)

    print("\nSample data population completed successfully!")


if __name__ == "__main__":
    asyncio.run(main())
