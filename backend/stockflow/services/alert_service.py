import math
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockflow.config import Settings, settings as default_settings
from stockflow.exceptions import InternalError
from stockflow.models.inventory import Inventory
from stockflow.models.product import Product
from stockflow.repositories.inventory_repo import InventoryRepository
from stockflow.repositories.product_repo import ProductRepository
from stockflow.utils.logs import get_logger

log = get_logger("alerts")


class AlertService:
    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or default_settings
        self.products = ProductRepository(db)
        self.inventory = InventoryRepository(db)

    def effective_threshold(self, product: Product) -> int:
        # unset and 0 both fall back to the configured default
        return product.low_stock_threshold or self.settings.DEFAULT_LOW_STOCK_THRESHOLD

    def days_until_stockout(self, quantity: int) -> int:
        # sales velocity is a fixed placeholder, not derived from the logs
        return math.floor(quantity / self.settings.AVERAGE_DAILY_SALES)

    def get_low_stock_alerts(self, company_id: int) -> Dict:
        """
        Low-stock alerts for every product of ``company_id``, one per
        warehouse whose stock is under the product's threshold and that has
        recorded at least one sale. Returns ``{"alerts": [...], "total_alerts": n}``
        with alerts ordered by product id, then inventory id.

        Runs a fixed number of queries regardless of catalogue size.
        """
        try:
            products = self.products.list_for_company(company_id)
            by_id = {p.id: p for p in products}
            inventories = self.inventory.list_for_products(by_id.keys())

            low: List[Inventory] = [
                inv
                for inv in inventories
                if inv.quantity < self.effective_threshold(by_id[inv.product_id])
            ]
            sold = self.inventory.ids_with_log_reason(
                (inv.id for inv in low), self.settings.SALE_LOG_REASON
            )
            alerts = [
                self._to_alert(by_id[inv.product_id], inv)
                for inv in low
                if inv.id in sold
            ]
        except SQLAlchemyError:
            log.exception("Low stock scan failed for company_id=%s", company_id)
            raise InternalError("Failed to fetch low stock alerts")

        log.debug(
            "company_id=%s products=%d inventories=%d below_threshold=%d alerts=%d",
            company_id,
            len(products),
            len(inventories),
            len(low),
            len(alerts),
        )
        return {"alerts": alerts, "total_alerts": len(alerts)}

    def _to_alert(self, product: Product, inv: Inventory) -> Dict:
        supplier = product.suppliers[0] if product.suppliers else None
        return {
            "product_id": product.id,
            "product_name": product.name,
            "sku": product.sku,
            "warehouse_id": inv.warehouse_id,
            "warehouse_name": inv.warehouse.name if inv.warehouse else None,
            "current_stock": inv.quantity,
            "threshold": self.effective_threshold(product),
            "days_until_stockout": self.days_until_stockout(inv.quantity),
            "supplier": {
                "id": supplier.id,
                "name": supplier.name,
                "contact_email": supplier.contact_email,
            }
            if supplier
            else None,
        }
