from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from stockflow.db import Base
from stockflow.models.product import product_suppliers


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    contact_email = Column(String(256), nullable=True)

    products = relationship(
        "Product", secondary=product_suppliers, back_populates="suppliers"
    )
