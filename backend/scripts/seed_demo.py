#!/usr/bin/env python3
"""
Seed a demo company: warehouses, suppliers, products with stock, and sale
events so the low-stock endpoint has something to report.

Usage:
    python scripts/seed_demo.py                   # built-in sample
    python scripts/seed_demo.py --file demo.json  # same shape as SAMPLE_DATA
    python scripts/seed_demo.py --reset           # drop tables first
"""
import argparse
import json
import os
import sys
from typing import Dict

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy.orm import Session

from stockflow.config import settings
from stockflow.db import SessionLocal, init_db
from stockflow.exceptions import ConflictError
from stockflow.models.product import Product
from stockflow.models.supplier import Supplier
from stockflow.repositories.catalog_repo import CatalogRepository
from stockflow.repositories.inventory_repo import InventoryRepository
from stockflow.services.product_service import ProductService
from stockflow.utils.logs import get_logger
from stockflow.utils.transactions import committed_unit

log = get_logger("seed")

SAMPLE_DATA = {
    "warehouses": [
        {"key": "main", "name": "Main Warehouse", "company_id": 1},
        {"key": "overflow", "name": "Overflow Warehouse", "company_id": 1},
    ],
    "suppliers": [
        {"key": "supplier-corp", "name": "Supplier Corp", "contact_email": "orders@supplier.com"},
        {"key": "another", "name": "Another Supplies", "contact_email": "hello@another.com"},
    ],
    "products": [
        {
            "name": "Widget A",
            "sku": "WID-001",
            "price": 12.5,
            "company_id": 1,
            "low_stock_threshold": 20,
            "suppliers": ["supplier-corp"],
            "stock": [
                {"warehouse": "main", "quantity": 5, "sales": 3},
                {"warehouse": "overflow", "quantity": 0, "sales": 1},
            ],
        },
        {
            "name": "Gizmo B",
            "sku": "GIZ-002",
            "price": 40,
            "company_id": 1,
            "suppliers": ["another", "supplier-corp"],
            "stock": [{"warehouse": "main", "quantity": 200, "sales": 10}],
        },
        {
            "name": "Gadget C",
            "sku": "GAD-003",
            "price": 7.25,
            "company_id": 1,
            "stock": [{"warehouse": "overflow", "quantity": 2, "sales": 0}],
        },
    ],
}


def seed(db: Session, data: Dict) -> Dict[str, int]:
    """
    Write ``data`` through the product service and repositories. Products
    whose SKU already exists are skipped; warehouses and suppliers are always
    inserted.
    Returns counters for what was created.
    """
    catalog = CatalogRepository(db)
    inventory = InventoryRepository(db)
    products = ProductService(db)
    counts = {"warehouses": 0, "suppliers": 0, "products": 0, "skipped": 0, "sales": 0}

    warehouse_ids: Dict[str, int] = {}
    supplier_ids: Dict[str, int] = {}
    with committed_unit(db):
        for w in data.get("warehouses", []):
            warehouse_ids[w["key"]] = catalog.create_warehouse(w["name"], w.get("company_id")).id
            counts["warehouses"] += 1
        for s in data.get("suppliers", []):
            supplier_ids[s["key"]] = catalog.create_supplier(s["name"], s.get("contact_email")).id
            counts["suppliers"] += 1

    for entry in data.get("products", []):
        stock = entry.get("stock") or []
        if not stock:
            log.warning("Skipping sku=%r: no stock entries", entry.get("sku"))
            counts["skipped"] += 1
            continue
        first = stock[0]
        try:
            product_id = products.create_product(
                {
                    "name": entry.get("name"),
                    "sku": entry.get("sku"),
                    "price": entry.get("price"),
                    "company_id": entry.get("company_id"),
                    "low_stock_threshold": entry.get("low_stock_threshold"),
                    "warehouse_id": warehouse_ids[first["warehouse"]],
                    "initial_quantity": first.get("quantity", 0),
                }
            )
        except ConflictError:
            counts["skipped"] += 1
            continue
        counts["products"] += 1

        with committed_unit(db):
            product = db.get(Product, product_id)
            for key in entry.get("suppliers", []):
                catalog.link_supplier(product, db.get(Supplier, supplier_ids[key]))
            for i, level in enumerate(stock):
                if i == 0:
                    inv = product.inventories[0]
                else:
                    inv = inventory.create(
                        product_id, warehouse_ids[level["warehouse"]], level.get("quantity", 0)
                    )
                for _ in range(level.get("sales", 0)):
                    inventory.add_log(inv.id, settings.SALE_LOG_REASON)
                    counts["sales"] += 1

    log.info("Seeded %s", counts)
    return counts


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo inventory data.")
    parser.add_argument("--file", "-f", default=None, help="JSON file shaped like SAMPLE_DATA")
    parser.add_argument("--reset", action="store_true", help="drop and recreate tables first")
    args = parser.parse_args()

    data = SAMPLE_DATA
    if args.file:
        if not os.path.exists(args.file):
            print("File not found:", args.file)
            sys.exit(1)
        with open(args.file, "r", encoding="utf-8") as f:
            data = json.load(f)

    init_db(reset=args.reset)
    db = SessionLocal()
    try:
        print(seed(db, data))
    finally:
        db.close()
