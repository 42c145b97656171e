from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SupplierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    contact_email: Optional[str] = None


class LowStockAlert(BaseModel):
    product_id: int
    product_name: str
    sku: str
    warehouse_id: int
    warehouse_name: Optional[str] = None
    current_stock: int
    threshold: int
    days_until_stockout: int
    supplier: Optional[SupplierOut] = None


class LowStockAlertsOut(BaseModel):
    alerts: List[LowStockAlert]
    total_alerts: int
