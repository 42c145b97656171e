import hashlib
import os
import tempfile
from typing import Optional

from filelock import FileLock, Timeout
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from stockflow.config import Settings, settings as default_settings
from stockflow.exceptions import ConflictError, InternalError, ValidationError
from stockflow.repositories.inventory_repo import InventoryRepository
from stockflow.repositories.product_repo import ProductRepository
from stockflow.schemas.product_schema import ProductCreate
from stockflow.utils.logs import get_logger
from stockflow.utils.transactions import committed_unit

log = get_logger("products")

REQUIRED_FIELDS = ("name", "sku", "price", "warehouse_id", "initial_quantity")


class ProductService:
    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or default_settings
        self.products = ProductRepository(db)
        self.inventory = InventoryRepository(db)

    def validate(self, payload: dict) -> ProductCreate:
        """
        Parse a raw request body. Strings must be non-empty; the other
        required fields only need to be present, so ``initial_quantity=0`` is
        accepted while a missing or null quantity is not.
        """
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        try:
            data = ProductCreate.model_validate(payload)
        except PydanticValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise ValidationError(f"Invalid value for: {', '.join(fields)}")

        missing = []
        for field in REQUIRED_FIELDS:
            value = getattr(data, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        return data

    def _sku_lock(self, sku: str) -> FileLock:
        """
        One lock file per SKU, named by digest so any SKU length or character
        set maps to a short, distinct file name.
        """
        locks_dir = self.settings.SKU_LOCK_DIR or os.path.join(
            tempfile.gettempdir(), "stockflow_locks"
        )
        os.makedirs(locks_dir, exist_ok=True)
        digest = hashlib.sha256(sku.encode("utf-8")).hexdigest()
        return FileLock(os.path.join(locks_dir, f"sku_{digest}.lock"))

    def create_product(self, payload: dict) -> int:
        """
        Create a product and its first inventory row in one transaction and
        return the new product id. The rows are committed before this returns.

        Raises ValidationError before touching the database, ConflictError when
        the SKU is taken (either by the pre-check or by the unique constraint
        at flush time), and InternalError for anything else.
        """
        data = self.validate(payload)
        try:
            lock = self._sku_lock(data.sku)
            with lock.acquire(timeout=self.settings.SKU_LOCK_TIMEOUT_SECONDS):
                return self._create_locked(data)
        except Timeout:
            log.error("Timed out waiting for creation lock on sku=%r", data.sku)
            raise InternalError("Something went wrong while creating product")
        except OSError:
            log.exception("Could not use creation lock for sku=%r", data.sku)
            raise InternalError("Something went wrong while creating product")

    def _create_locked(self, data: ProductCreate) -> int:
        try:
            with committed_unit(self.db):
                if self.products.get_by_sku(data.sku):
                    raise ConflictError("SKU already exists")
                product = self.products.create(
                    sku=data.sku,
                    name=data.name,
                    price=data.price,
                    company_id=data.company_id,
                    low_stock_threshold=data.low_stock_threshold,
                )
                self.inventory.create(
                    product_id=product.id,
                    warehouse_id=data.warehouse_id,
                    quantity=data.initial_quantity,
                )
                product_id = product.id
        except ConflictError:
            log.info("Rejected duplicate sku=%r", data.sku)
            raise
        except IntegrityError:
            # the pre-check can lose a race with another writer; the unique
            # constraint has the final word
            if self._sku_taken_after_failure(data.sku):
                log.info("Unique constraint rejected duplicate sku=%r", data.sku)
                raise ConflictError("SKU already exists")
            log.exception("Integrity failure creating sku=%r", data.sku)
            raise InternalError("Something went wrong while creating product")
        except SQLAlchemyError:
            self.db.rollback()
            log.exception("Failed to create product sku=%r", data.sku)
            raise InternalError("Something went wrong while creating product")

        log.info(
            "Created product id=%s sku=%r warehouse_id=%s qty=%s",
            product_id,
            data.sku,
            data.warehouse_id,
            data.initial_quantity,
        )
        return product_id

    def _sku_taken_after_failure(self, sku: str) -> bool:
        try:
            self.db.rollback()
            return self.products.get_by_sku(sku) is not None
        except SQLAlchemyError:
            self.db.rollback()
            log.exception("Could not re-check sku=%r after integrity failure", sku)
            raise InternalError("Something went wrong while creating product")
