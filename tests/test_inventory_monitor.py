"""
Tests for Inventory Monitor service.
"""
import pytest

from stockroom.models.inventory import Product, InventoryItem
from stockroom.models.logs import LogEntry
from stockroom.core.exceptions import ConflictError, NotFoundError
from stockroom.services.inventory_monitor import (
    InventoryMonitor,
    clamp_quantity,
    describe_changes,
    diff_size_quantities,
    sanitize_size_quantities,
    summarize_quantities,
)


class TestQuantityHelpers:
    """Test cases for the quantity helpers."""

    @pytest.mark.parametrize("value,expected", [
        (3, 3),
        ("4", 4),
        (2.7, 2),
        (-1, 0),
        (float("nan"), 0),
        (None, 0),
        ("abc", 0),
    ])
    def test_clamp_quantity(self, value, expected):
        assert clamp_quantity(value) == expected

    def test_sanitize_size_quantities(self):
        assert sanitize_size_quantities({"S": -2, "M": "3", "L": None}) == {"S": 0, "M": 3, "L": 0}
        assert sanitize_size_quantities(None) == {}

    def test_diff_walks_sorted_union_of_sizes(self):
        old = {"S": 1, "M": 2}
        new = {"M": 2, "L": 4, "S": 3}
        assert diff_size_quantities(old, new) == ["L: 0→4", "S: 1→3"]

    def test_diff_treats_missing_size_as_zero(self):
        assert diff_size_quantities({"XL": 2}, {}) == ["XL: 2→0"]
        assert diff_size_quantities({"XL": 0}, {}) == []

    def test_describe_changes(self):
        assert describe_changes({"S": 1}, {"S": 3, "M": 1}) == "M: 0→1, S: 1→3"
        assert describe_changes({"S": 1}, {"S": 1}) == "No quantity changes"

    def test_summarize_quantities(self):
        assert summarize_quantities({"S": 2, "M": 0, "L": 1}) == "L: 1, S: 2"
        assert summarize_quantities({"S": 0}) == "No quantities"


class TestInventoryMonitor:
    """Test cases for InventoryMonitor service."""

    @pytest.fixture
    def inventory_monitor(self):
        return InventoryMonitor()

    @pytest.fixture
    def stored_product(self, db_session):
        product = Product(
            name="Box Logo Tee",
            image="tee.jpg",
            type="Box Logo Tee",
            sizes=["S", "M"],
            size_quantities={"S": 4},
        )
        db_session.add(product)
        db_session.commit()
        return product

    @pytest.mark.asyncio
    async def test_add_product_seeds_from_product_sizes(self, inventory_monitor, db_session, stored_product):
        result = await inventory_monitor.add_product(db_session, stored_product.id)

        assert result["size_quantities"] == {"S": 4, "M": 0}
        db_session.refresh(stored_product)
        assert stored_product.in_inventory is True

        entry = db_session.query(LogEntry).one()
        assert entry.category == "inventory"
        assert entry.message == 'Added "Box Logo Tee" to inventory'
        assert entry.details["action"] == "added"

    @pytest.mark.asyncio
    async def test_add_product_without_sizes_uses_default_run(self, inventory_monitor, db_session):
        product = Product(name="Beanie", image="beanie.jpg", type="Beanie", sizes=[], size_quantities={})
        db_session.add(product)
        db_session.commit()

        result = await inventory_monitor.add_product(db_session, product.id)

        assert list(result["size_quantities"]) == ["XXS", "XS", "S", "M", "L", "XL", "XXL"]
        assert set(result["size_quantities"].values()) == {0}

    @pytest.mark.asyncio
    async def test_add_product_errors(self, inventory_monitor, db_session, stored_product):
        with pytest.raises(ValueError, match="product_id is required"):
            await inventory_monitor.add_product(db_session, None)
        with pytest.raises(NotFoundError):
            await inventory_monitor.add_product(db_session, "missing")

        await inventory_monitor.add_product(db_session, stored_product.id)
        with pytest.raises(ConflictError):
            await inventory_monitor.add_product(db_session, stored_product.id)

    @pytest.mark.asyncio
    async def test_update_quantities_logs_diff(self, inventory_monitor, db_session, stored_product):
        await inventory_monitor.add_product(db_session, stored_product.id)

        result = await inventory_monitor.update_quantities(db_session, stored_product.id, {"S": 1, "M": -5})

        assert result["size_quantities"] == {"S": 1, "M": 0}
        entry = db_session.query(LogEntry).filter(LogEntry.message.like("Updated%")).one()
        assert entry.details["changes"] == "S: 4→1"

    @pytest.mark.asyncio
    async def test_batch_update_skips_untracked(self, inventory_monitor, db_session, stored_product):
        await inventory_monitor.add_product(db_session, stored_product.id)

        updated = await inventory_monitor.batch_update(db_session, [
            {"product_id": stored_product.id, "size_quantities": {"S": 2, "M": 2}},
            {"product_id": "untracked", "size_quantities": {"S": 1}},
            {"product_id": stored_product.id},
        ])

        assert updated == 1
        item = db_session.query(InventoryItem).one()
        assert item.size_quantities == {"S": 2, "M": 2}
        entry = db_session.query(LogEntry).filter(LogEntry.message.like("Updated%")).one()
        assert entry.details["product_count"] == 1

    @pytest.mark.asyncio
    async def test_batch_update_requires_updates(self, inventory_monitor, db_session):
        with pytest.raises(ValueError):
            await inventory_monitor.batch_update(db_session, [])

    @pytest.mark.asyncio
    async def test_remove_product_logs_summary(self, inventory_monitor, db_session, stored_product):
        await inventory_monitor.add_product(db_session, stored_product.id)

        await inventory_monitor.remove_product(db_session, stored_product.id)

        assert db_session.query(InventoryItem).count() == 0
        entry = db_session.query(LogEntry).filter(LogEntry.message.like("Removed%")).one()
        assert entry.details["sizes_and_quantities_summary"] == "S: 4"
        db_session.refresh(stored_product)
        assert stored_product.in_inventory is False

    @pytest.mark.asyncio
    async def test_remove_untracked_product(self, inventory_monitor, db_session):
        with pytest.raises(NotFoundError):
            await inventory_monitor.remove_product(db_session, "missing")
