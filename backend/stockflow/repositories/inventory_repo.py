from typing import Iterable, List, Set

from sqlalchemy.orm import Session, joinedload

from stockflow.models.inventory import Inventory
from stockflow.models.inventory_log import InventoryLog


class InventoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, product_id: int, warehouse_id: int, quantity: int) -> Inventory:
        inv = Inventory(
            product_id=product_id, warehouse_id=warehouse_id, quantity=quantity
        )
        self.db.add(inv)
        self.db.flush()
        return inv

    def list_for_products(self, product_ids: Iterable[int]) -> List[Inventory]:
        ids = list(product_ids)
        if not ids:
            return []
        return (
            self.db.query(Inventory)
            .options(joinedload(Inventory.warehouse))
            .filter(Inventory.product_id.in_(ids))
            .order_by(Inventory.product_id, Inventory.id)
            .all()
        )

    def ids_with_log_reason(self, inventory_ids: Iterable[int], reason: str) -> Set[int]:
        """Subset of ``inventory_ids`` that have at least one log with ``reason``."""
        ids = list(inventory_ids)
        if not ids:
            return set()
        rows = (
            self.db.query(InventoryLog.inventory_id)
            .filter(InventoryLog.inventory_id.in_(ids), InventoryLog.reason == reason)
            .distinct()
            .all()
        )
        return {r[0] for r in rows}

    def add_log(self, inventory_id: int, reason: str) -> InventoryLog:
        entry = InventoryLog(inventory_id=inventory_id, reason=reason)
        self.db.add(entry)
        self.db.flush()
        return entry
