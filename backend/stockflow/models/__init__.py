# Importing the model modules registers their tables on Base.metadata.
from stockflow.models.inventory import Inventory
from stockflow.models.inventory_log import InventoryLog
from stockflow.models.product import Product, product_suppliers
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse

__all__ = [
    "Inventory",
    "InventoryLog",
    "Product",
    "Supplier",
    "Warehouse",
    "product_suppliers",
]
