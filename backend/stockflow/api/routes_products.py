import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from stockflow.db import get_db
from stockflow.exceptions import StockflowException
from stockflow.schemas.product_schema import ProductCreated
from stockflow.services.product_service import ProductService

router = APIRouter(tags=["products"])


async def raw_json_body(request: Request) -> Any:
    """
    Decode the body without a declared type so that arrays, scalars and
    broken JSON reach the product service's validation and come back as 400.
    An empty body decodes to ``{}``.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")


@router.post(
    "",
    summary="Create product with initial stock",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductCreated,
)
def create_product(payload: Any = Depends(raw_json_body), db: Session = Depends(get_db)):
    """
    payload: { "name": "Widget", "sku": "WID-001", "price": 9.99,
               "warehouse_id": 1, "initial_quantity": 0 }
    company_id and low_stock_threshold may also be given.
    """
    svc = ProductService(db)
    try:
        product_id = svc.create_product(payload)
    except StockflowException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return ProductCreated(product_id=product_id)
