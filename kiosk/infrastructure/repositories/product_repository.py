import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from kiosk.core.config import settings
from kiosk.core.errors import StorageError
from kiosk.domain.models import Product
from kiosk.infrastructure.database import SessionLocal
from kiosk.interfaces.IProductRepository import IProductRepository

logger = logging.getLogger(__name__)

class SqlProductRepository(IProductRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def list_products(self) -> List[Product]:
        """All products, alphabetical."""
        session = self.session_factory()
        try:
            return session.query(Product).order_by(Product.name).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Read Error (products): {e}")
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def create_product(self, name: str, price: float, image_url: Optional[str] = None,
                       category: Optional[str] = None) -> Product:
        session = self.session_factory()
        try:
            product = Product(
                name=name,
                price=price,
                image_url=image_url or "",
                category=category or settings.DEFAULT_CATEGORY,
                in_stock=True,
            )
            session.add(product)
            session.commit()
            session.refresh(product)
            return product
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error adding product: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def update_product(self, product_id: int, name: str, price: float, image_url: Optional[str],
                       category: Optional[str], in_stock: Optional[bool]) -> Product:
        """Replace every field of a product. `in_stock` falls back to True."""
        session = self.session_factory()
        try:
            product = self._get_or_fail(session, product_id)
            product.name = name
            product.price = price
            product.image_url = image_url or ""
            product.category = category or settings.DEFAULT_CATEGORY
            product.in_stock = in_stock if in_stock is not None else True
            session.commit()
            session.refresh(product)
            return product
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error updating product {product_id}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def delete_product(self, product_id: int) -> None:
        # Zero matched rows is fine: deleting twice is not an error.
        session = self.session_factory()
        try:
            session.query(Product).filter(Product.id == product_id).delete()
            session.commit()
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error deleting product {product_id}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def toggle_stock(self, product_id: int, in_stock: Optional[bool] = None) -> Product:
        """Set the stock flag, or flip it when no value is given."""
        session = self.session_factory()
        try:
            product = self._get_or_fail(session, product_id)
            product.in_stock = (not product.in_stock) if in_stock is None else in_stock
            session.commit()
            session.refresh(product)
            return product
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error updating stock for product {product_id}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def _get_or_fail(self, session, product_id: int) -> Product:
        product = session.get(Product, product_id)
        if product is None:
            raise StorageError(f"product {product_id} not found")
        return product
