import json
import logging
from typing import Any, Dict, List

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from kiosk.core.errors import StorageError
from kiosk.domain.models import Order
from kiosk.infrastructure.database import SessionLocal
from kiosk.interfaces.IOrderRepository import IOrderRepository

logger = logging.getLogger(__name__)

class SqlOrderRepository(IOrderRepository):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_order(self, payload: Dict[str, Any]) -> Order:
        """
        Stores a new order. `payload["items"]` is a list of
        {"name", "quantity", "price"} dicts and is kept as JSON text.
        """
        session = self.session_factory()
        try:
            data = dict(payload)
            data["items"] = json.dumps(data.get("items") or [], ensure_ascii=False)
            new_order = Order(**data, status="pending")
            session.add(new_order)
            session.commit()
            session.refresh(new_order)
            return new_order
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error saving order: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def list_orders(self) -> List[Order]:
        """
        Retrieves every order from the database.
        Ordered by created_at DESC (Newest first).
        """
        session = self.session_factory()
        try:
            return session.query(Order).order_by(desc(Order.created_at), desc(Order.id)).all()
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Read Error (orders): {e}")
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def update_status(self, order_id: int, status: str) -> Order:
        session = self.session_factory()
        try:
            order = session.get(Order, order_id)
            if order is None:
                raise StorageError(f"order {order_id} not found")
            order.status = status
            session.commit()
            session.refresh(order)
            return order
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error updating order {order_id}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()

    def delete_order(self, order_id: int) -> None:
        session = self.session_factory()
        try:
            session.query(Order).filter(Order.id == order_id).delete()
            session.commit()
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error deleting order {order_id}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()
