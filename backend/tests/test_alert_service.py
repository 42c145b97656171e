import pytest
from sqlalchemy.exc import OperationalError

from stockflow.config import Settings
from stockflow.exceptions import InternalError
from stockflow.repositories.inventory_repo import InventoryRepository
from stockflow.services.alert_service import AlertService


def test_only_low_stock_with_sales_alerts(db, build):
    wh = build.warehouse("Main Warehouse")
    p1 = build.product("P1", low_stock_threshold=5)
    p2 = build.product("P2")
    build.stock(p1, wh, 3, logs=["sale"])
    build.stock(p2, wh, 20, logs=["sale"])

    result = AlertService(db).get_low_stock_alerts(1)

    assert result["total_alerts"] == 1
    assert result["alerts"] == [
        {
            "product_id": p1,
            "product_name": "Product P1",
            "sku": "P1",
            "warehouse_id": wh,
            "warehouse_name": "Main Warehouse",
            "current_stock": 3,
            "threshold": 5,
            "days_until_stockout": 3,
            "supplier": None,
        }
    ]


def test_default_threshold_applies_when_unset(db, build):
    wh = build.warehouse()
    p = build.product("DEF")
    build.stock(p, wh, 9, logs=["sale"])
    build.stock(p, build.warehouse("Second"), 10, logs=["sale"])

    alerts = AlertService(db).get_low_stock_alerts(1)["alerts"]

    assert [a["current_stock"] for a in alerts] == [9]
    assert alerts[0]["threshold"] == 10


def test_never_sold_inventory_does_not_alert(db, build):
    wh = build.warehouse()
    p = build.product("QUIET", low_stock_threshold=5)
    build.stock(p, wh, 0)
    build.stock(p, build.warehouse("Other"), 1, logs=["restock", "adjustment"])

    result = AlertService(db).get_low_stock_alerts(1)

    assert result == {"alerts": [], "total_alerts": 0}


def test_sale_on_another_warehouse_does_not_count(db, build):
    p = build.product("SPLIT")
    build.stock(p, build.warehouse("A"), 2)
    build.stock(p, build.warehouse("B"), 50, logs=["sale"])

    assert AlertService(db).get_low_stock_alerts(1)["total_alerts"] == 0


def test_first_supplier_is_surfaced(db, build):
    wh = build.warehouse()
    s1 = build.supplier("Supplier Corp", "orders@supplier.com")
    s2 = build.supplier("Another Supplies", "hello@another.com")
    p = build.product("SUP", suppliers=[s2, s1])
    build.stock(p, wh, 1, logs=["sale"])

    alert = AlertService(db).get_low_stock_alerts(1)["alerts"][0]

    assert alert["supplier"] == {
        "id": s1,
        "name": "Supplier Corp",
        "contact_email": "orders@supplier.com",
    }


def test_alerts_follow_product_then_inventory_order(db, build):
    w1 = build.warehouse("W1")
    w2 = build.warehouse("W2")
    a = build.product("A")
    b = build.product("B")
    build.stock(b, w1, 1, logs=["sale"])
    build.stock(a, w2, 2, logs=["sale"])
    build.stock(a, w1, 3, logs=["sale"])

    alerts = AlertService(db).get_low_stock_alerts(1)["alerts"]

    assert [(x["sku"], x["warehouse_name"]) for x in alerts] == [
        ("A", "W2"),
        ("A", "W1"),
        ("B", "W1"),
    ]
    assert len(alerts) == 3


def test_other_companies_are_excluded(db, build):
    wh = build.warehouse(company_id=2)
    mine = build.product("MINE", company_id=2)
    theirs = build.product("THEIRS", company_id=3)
    build.stock(mine, wh, 1, logs=["sale"])
    build.stock(theirs, wh, 1, logs=["sale"])

    svc = AlertService(db)
    assert [a["sku"] for a in svc.get_low_stock_alerts(2)["alerts"]] == ["MINE"]
    assert svc.get_low_stock_alerts(404) == {"alerts": [], "total_alerts": 0}


def test_configured_constants_are_honored(db, build):
    wh = build.warehouse()
    p = build.product("CFG")
    build.stock(p, wh, 15, logs=["sold"])

    settings = Settings(
        DEFAULT_LOW_STOCK_THRESHOLD=50, AVERAGE_DAILY_SALES=2, SALE_LOG_REASON="sold"
    )
    alert = AlertService(db, settings).get_low_stock_alerts(1)["alerts"][0]

    assert alert["threshold"] == 50
    assert alert["days_until_stockout"] == 7


def test_store_failure_is_internal_error(db, build, monkeypatch):
    wh = build.warehouse()
    p = build.product("ERR", low_stock_threshold=5)
    build.stock(p, wh, 1, logs=["sale"])

    def boom(self, inventory_ids, reason):
        raise OperationalError("SELECT inventory_logs", {}, Exception("database is locked"))

    monkeypatch.setattr(InventoryRepository, "ids_with_log_reason", boom)

    with pytest.raises(InternalError) as exc:
        AlertService(db).get_low_stock_alerts(1)
    assert exc.value.message == "Failed to fetch low stock alerts"


def test_zero_threshold_falls_back_to_default(db, build):
    wh = build.warehouse()
    p = build.product("ZERO", low_stock_threshold=0)
    build.stock(p, wh, 3, logs=["sale"])

    alerts = AlertService(db).get_low_stock_alerts(1)["alerts"]

    assert [(a["sku"], a["threshold"]) for a in alerts] == [("ZERO", 10)]
