from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from stockflow.db import Base


class InventoryLog(Base):
    """
    Append-only record of something that moved stock for an inventory row.
    Rows are written by the stock-movement process; the alert scan only checks
    whether a row with the sale reason exists.
    """

    __tablename__ = "inventory_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    inventory_id = Column(Integer, ForeignKey("inventory.id"), nullable=False, index=True)
    reason = Column(String(64), nullable=False, index=True)  # sale, restock, adjustment
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    inventory = relationship("Inventory", back_populates="logs")
