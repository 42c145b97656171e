from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from stockflow.db import get_db
from stockflow.exceptions import StockflowException
from stockflow.schemas.alert_schema import LowStockAlertsOut
from stockflow.services.alert_service import AlertService

router = APIRouter(prefix="/api/companies", tags=["alerts"])


@router.get(
    "/{company_id}/alerts/low-stock",
    summary="Low stock alerts for a company",
    response_model=LowStockAlertsOut,
)
def low_stock_alerts(company_id: int, db: Session = Depends(get_db)):
    svc = AlertService(db)
    try:
        return svc.get_low_stock_alerts(company_id)
    except StockflowException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
