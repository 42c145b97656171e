from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from stockflow.db import Base


class Warehouse(Base):
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    company_id = Column(Integer, nullable=True, index=True)

    inventories = relationship("Inventory", back_populates="warehouse")
