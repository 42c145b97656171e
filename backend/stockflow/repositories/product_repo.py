from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from stockflow.models.product import Product


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.sku == sku).first()

    def list_for_company(self, company_id: int) -> List[Product]:
        """
        Products owned by ``company_id`` in id order, suppliers loaded up front
        so callers can read ``product.suppliers`` without extra round-trips.
        """
        return (
            self.db.query(Product)
            .options(selectinload(Product.suppliers))
            .filter(Product.company_id == company_id)
            .order_by(Product.id)
            .all()
        )

    def create(
        self,
        sku: str,
        name: str,
        price: float,
        company_id: Optional[int] = None,
        low_stock_threshold: Optional[int] = None,
    ) -> Product:
        p = Product(
            sku=sku,
            name=name,
            price=price,
            company_id=company_id,
            low_stock_threshold=low_stock_threshold,
        )
        self.db.add(p)
        self.db.flush()  # assigns p.id
        return p
