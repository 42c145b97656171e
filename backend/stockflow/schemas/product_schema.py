from typing import Optional

from pydantic import BaseModel


class ProductCreate(BaseModel):
    # Every field is optional at parse time so that missing input can be
    # reported as a 400 by the service rather than a 422 by the framework.
    name: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[float] = None
    warehouse_id: Optional[int] = None
    initial_quantity: Optional[int] = None
    company_id: Optional[int] = None
    low_stock_threshold: Optional[int] = None


class ProductCreated(BaseModel):
    message: str = "Product created successfully"
    product_id: int
