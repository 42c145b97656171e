from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockflow.db import get_db
from stockflow.utils.logs import get_logger

router = APIRouter()
log = get_logger("health")


@router.get("/health", tags=["health"])
def health(db: Session = Depends(get_db)):
    db_ok = False
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError:
        log.warning("Database health check failed", exc_info=True)

    return {"status": "ok" if db_ok else "degraded", "db": db_ok}
