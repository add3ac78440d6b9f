"""
Tests for Sales Logger service.
"""
import pytest
from datetime import datetime, timedelta, timezone

from stockroom.services.sales_logger import SalesLogger, sanitize_line_items


class TestSalesLogger:
    """Test cases for SalesLogger service."""

    @pytest.fixture
    def sales_logger(self):
        """Create a SalesLogger instance for testing."""
        return SalesLogger()

    @pytest.fixture
    def sample_sale_data(self):
        """Sample sale data for testing."""
        return {
            "platform": "Depop",
            "payment_method": "Venmo",
            "line_items": [
                {
                    "product_id": "p1",
                    "product_name": "Essentials Hoodie",
                    "quantity": 2,
                    "price_per_unit": 60.0,
                    "size": "M"
                },
                {
                    "product_id": "p2",
                    "product_name": "Box Logo Tee",
                    "quantity": 1,
                    "price_per_unit": 25.5,
                    "size": "L"
                }
            ],
            "notes": "Test sale"
        }

    def test_sanitize_line_items(self):
        items = sanitize_line_items([
            {"product_id": "p1", "product_name": "Hoodie", "quantity": "2", "price_per_unit": "abc"},
            {"product_id": "p2", "product_name": "Tee", "quantity": 0, "price_per_unit": 10},
            {"product_id": None, "product_name": "Cap", "quantity": 1, "price_per_unit": 10},
            {"product_id": "p4", "product_name": "", "quantity": 1, "price_per_unit": 10},
        ])

        assert len(items) == 1
        assert items[0]["quantity"] == 2
        assert items[0]["price_per_unit"] == 0

    @pytest.mark.asyncio
    async def test_record_sale_success(self, sales_logger, db_session, sample_sale_data):
        """Test successful sale recording."""
        result = await sales_logger.record_sale(db_session, sample_sale_data)

        assert result["total_amount"] == 145.5
        assert result["sale_type"] == "online"
        assert result["platform"] == "Depop"
        assert len(result["line_items"]) == 2
        assert result["date_sold"] is not None

    @pytest.mark.asyncio
    async def test_record_sale_requires_platform(self, sales_logger, db_session, sample_sale_data):
        sample_sale_data["platform"] = None
        with pytest.raises(ValueError, match="Platform is required"):
            await sales_logger.record_sale(db_session, sample_sale_data)

    @pytest.mark.asyncio
    async def test_record_sale_no_items(self, sales_logger, db_session, sample_sale_data):
        """Test sale recording with no items."""
        sample_sale_data["line_items"] = []
        with pytest.raises(ValueError, match="At least one line item is required"):
            await sales_logger.record_sale(db_session, sample_sale_data)

    @pytest.mark.asyncio
    async def test_record_sale_all_items_invalid(self, sales_logger, db_session, sample_sale_data):
        sample_sale_data["line_items"] = [{"product_id": "p1", "product_name": "Hoodie", "quantity": -1}]
        with pytest.raises(ValueError, match="All line items are invalid"):
            await sales_logger.record_sale(db_session, sample_sale_data)

    @pytest.mark.asyncio
    async def test_wholesale_requires_payment_and_type(self, sales_logger, db_session, sample_sale_data):
        sample_sale_data.update({"platform": "Store", "sale_type": "wholesale", "payment_method": None})
        with pytest.raises(ValueError, match="Payment method is required for wholesale sales"):
            await sales_logger.record_sale(db_session, sample_sale_data)

        sample_sale_data["payment_method"] = "Cash"
        with pytest.raises(ValueError, match="Wholesale type is required for wholesale sales"):
            await sales_logger.record_sale(db_session, sample_sale_data)

        sample_sale_data.update({"wholesale_type": "Store", "buyer_store_name": "Corner Shop"})
        result = await sales_logger.record_sale(db_session, sample_sale_data)
        assert result["wholesale_type"] == "Store"
        assert result["buyer_store_name"] == "Corner Shop"

    @pytest.mark.asyncio
    async def test_invalid_platform(self, sales_logger, db_session, sample_sale_data):
        sample_sale_data["platform"] = "Etsy"
        with pytest.raises(ValueError, match="Invalid platform"):
            await sales_logger.record_sale(db_session, sample_sale_data)

    @pytest.mark.asyncio
    async def test_list_sales_newest_sold_first(self, sales_logger, db_session, sample_sale_data):
        now = datetime.now(timezone.utc)
        await sales_logger.record_sale(db_session, {**sample_sale_data, "date_sold": now - timedelta(days=3)})
        await sales_logger.record_sale(db_session, {**sample_sale_data, "date_sold": now - timedelta(days=1)})

        sales = await sales_logger.list_sales(db_session)

        assert sales[0]["date_sold"] > sales[1]["date_sold"]

    @pytest.mark.asyncio
    async def test_get_sales_summary(self, sales_logger, db_session, sample_sale_data):
        """Test getting sales summary."""
        now = datetime.now(timezone.utc)
        await sales_logger.record_sale(db_session, {**sample_sale_data, "date_sold": now - timedelta(days=2)})
        await sales_logger.record_sale(db_session, {
            **sample_sale_data,
            "platform": "Ebay",
            "line_items": [sample_sale_data["line_items"][1]],
            "date_sold": now - timedelta(days=1),
        })
        await sales_logger.record_sale(db_session, {**sample_sale_data, "date_sold": now - timedelta(days=60)})

        result = await sales_logger.get_sales_summary(db_session)

        assert result["total_sales"] == 2
        assert result["total_revenue"] == 171.0
        assert result["average_transaction"] == 85.5
        assert result["revenue_by_platform"] == {"Depop": 145.5, "Ebay": 25.5}
        assert result["top_products"][0]["product_id"] == "p1"
        assert result["top_products"][0]["total_quantity"] == 2

    @pytest.mark.asyncio
    async def test_summary_rejects_inverted_range(self, sales_logger, db_session):
        now = datetime.now(timezone.utc)
        with pytest.raises(ValueError):
            await sales_logger.get_sales_summary(db_session, now, now - timedelta(days=1))
