import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError

from kiosk.core.errors import StorageError
from kiosk.domain.models import Sale
from kiosk.infrastructure.database import SessionLocal
from kiosk.interfaces.ISalesLedger import ISalesLedger

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

def line_total(price, quantity: int) -> Decimal:
    return (Decimal(str(price)) * quantity).quantize(CENT, rounding=ROUND_HALF_UP)

class SqlSalesLedger(ISalesLedger):

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def record_order(self, order_id: int, items: List[Dict]) -> int:
        """
        Appends one sale row per line item. All rows go in a single
        transaction: either the whole order is recorded or nothing is.
        """
        session = self.session_factory()
        try:
            rows = [
                Sale(
                    order_id=order_id,
                    product_name=item["name"],
                    quantity=item["quantity"],
                    price=Decimal(str(item["price"])),
                    total=line_total(item["price"], item["quantity"]),
                )
                for item in items
            ]
            session.add_all(rows)
            session.commit()
            logger.info(f"✅ Sale recorded: order {order_id} ({len(rows)} items)")
            return len(rows)
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error recording sale for order {order_id}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        finally:
            session.close()
