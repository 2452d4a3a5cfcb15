"""Product service - inventory records with soft delete."""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.errors import ConflictError, NotFoundError
from catalog_api.models.product import Product
from catalog_api.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"category", "image_url"}


class ProductService:
    """Create, list, update and soft-delete products.

    SKU uniqueness spans active and inactive products. The lookup before
    each write only produces a readable error; the unique index on
    ``products.sku`` is what actually guarantees it.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, product_data: ProductCreate) -> Product:
        self._ensure_sku_available(product_data.sku)

        product = Product(**product_data.model_dump())
        self.db.add(product)
        self._commit()
        self.db.refresh(product)
        logger.info(f"Created product {product.sku!r} (id={product.id})")
        return product

    def find_all(
        self,
        brand: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> List[Product]:
        """List active products, optionally filtered by brand and category."""
        query = self.db.query(Product).filter(Product.is_active.is_(True))

        if brand:
            query = query.filter(Product.brand == brand)
        if category:
            query = query.filter(Product.category == category)

        offset = (max(page, 1) - 1) * limit
        return query.order_by(Product.id).offset(offset).limit(limit).all()

    def find_one(self, product_id: int) -> Product:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product not found")
        return product

    def update(self, product_id: int, product_update: ProductUpdate) -> Product:
        product = self.find_one(product_id)

        update_data = {
            field: value
            for field, value in product_update.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }

        # Check if new SKU is unique
        new_sku = update_data.get("sku")
        if new_sku and new_sku != product.sku:
            self._ensure_sku_available(new_sku)

        for field, value in update_data.items():
            setattr(product, field, value)

        self._commit()
        self.db.refresh(product)
        logger.info(f"Updated product id={product.id} fields={sorted(update_data)}")
        return product

    def remove(self, product_id: int) -> Product:
        """Soft delete: the row stays, but find_all no longer returns it."""
        return self._set_active(product_id, False)

    def restore(self, product_id: int) -> Product:
        """Undo a soft delete."""
        return self._set_active(product_id, True)

    def _set_active(self, product_id: int, active: bool) -> Product:
        product = self.find_one(product_id)
        product.is_active = active
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product id={product_id} {'restored' if active else 'soft-deleted'}")
        return product

    def _ensure_sku_available(self, sku: str) -> None:
        existing = self.db.query(Product).filter(Product.sku == sku).first()
        if existing is None:
            return
        logger.warning(f"SKU {sku!r} already used by product id={existing.id}")
        if not existing.is_active:
            raise ConflictError("SKU belongs to a deleted product")
        raise ConflictError("SKU already exists")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Unique constraint rejected product write")
            raise ConflictError("SKU already exists")
