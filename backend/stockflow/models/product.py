from sqlalchemy import Column, Float, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from stockflow.db import Base

product_suppliers = Table(
    "product_suppliers",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("supplier_id", Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), primary_key=True),
)


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(64), unique=True, index=True, nullable=False)
    name = Column(String(256), nullable=False)
    price = Column(Float, nullable=False, default=0)
    company_id = Column(Integer, nullable=True, index=True)  # no companies table
    low_stock_threshold = Column(Integer, nullable=True)  # null -> configured default

    inventories = relationship(
        "Inventory", back_populates="product", order_by="Inventory.id"
    )
    suppliers = relationship(
        "Supplier",
        secondary=product_suppliers,
        back_populates="products",
        order_by="Supplier.id",
    )

    def __repr__(self):
        return f"<Product sku={self.sku} name={self.name}>"
