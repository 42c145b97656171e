from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stockflow.config import Settings
from stockflow.db import build_engine, get_db, init_db
from stockflow.main import app
from stockflow.models import Inventory, InventoryLog, Product, Supplier, Warehouse


class Builder:
    """Writes fixture rows straight through the ORM and commits each one."""

    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj) -> int:
        # read the id before commit so the session is left idle
        self.db.add(obj)
        self.db.flush()
        obj_id = obj.id
        self.db.commit()
        return obj_id

    def warehouse(self, name: str = "Main Warehouse", company_id: int = 1) -> int:
        return self._save(Warehouse(name=name, company_id=company_id))

    def supplier(self, name: str, contact_email: Optional[str] = None) -> int:
        return self._save(Supplier(name=name, contact_email=contact_email))

    def product(
        self,
        sku: str,
        company_id: int = 1,
        low_stock_threshold: Optional[int] = None,
        suppliers: Iterable[int] = (),
        price: float = 1.0,
    ) -> int:
        p = Product(
            sku=sku,
            name=f"Product {sku}",
            price=price,
            company_id=company_id,
            low_stock_threshold=low_stock_threshold,
        )
        for supplier_id in suppliers:
            p.suppliers.append(self.db.get(Supplier, supplier_id))
        return self._save(p)

    def stock(self, product_id: int, warehouse_id: int, quantity: int, logs: Iterable[str] = ()) -> int:
        inv = Inventory(product_id=product_id, warehouse_id=warehouse_id, quantity=quantity)
        for reason in logs:
            inv.logs.append(InventoryLog(reason=reason))
        return self._save(inv)


@pytest.fixture
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def build(db):
    return Builder(db)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(SKU_LOCK_DIR=str(tmp_path / "locks"))


@pytest.fixture
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
