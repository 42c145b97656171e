from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from stockflow.db import Base


class Inventory(Base):
    """Stock of one product at one warehouse."""

    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="inventories")
    warehouse = relationship("Warehouse", back_populates="inventories")
    logs = relationship(
        "InventoryLog", back_populates="inventory", order_by="InventoryLog.id"
    )

    def __repr__(self):
        return f"<Inventory product_id={self.product_id} warehouse_id={self.warehouse_id} qty={self.quantity}>"
