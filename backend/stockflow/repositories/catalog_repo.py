from typing import Optional

from sqlalchemy.orm import Session

from stockflow.models.product import Product
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse


class CatalogRepository:
    """Warehouses and suppliers; written by seeding and admin tooling."""

    def __init__(self, db: Session):
        self.db = db

    def create_warehouse(self, name: str, company_id: Optional[int]) -> Warehouse:
        w = Warehouse(name=name, company_id=company_id)
        self.db.add(w)
        self.db.flush()
        return w

    def create_supplier(self, name: str, contact_email: Optional[str] = None) -> Supplier:
        s = Supplier(name=name, contact_email=contact_email)
        self.db.add(s)
        self.db.flush()
        return s

    def link_supplier(self, product: Product, supplier: Supplier) -> None:
        if supplier not in product.suppliers:
            product.suppliers.append(supplier)
            self.db.flush()
