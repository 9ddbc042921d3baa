import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional, Tuple

import pytz
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from kiosk.core.config import settings
from kiosk.domain.models import Sale
from kiosk.infrastructure.database import SessionLocal

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 3
NO_SALES_PLACEHOLDER = "No sales today 😔"

def day_bounds(day: date, tz) -> Tuple[datetime, datetime]:
    """[start, end) of a local calendar day, expressed in UTC."""
    start = tz.localize(datetime.combine(day, time.min))
    end = tz.localize(datetime.combine(day + timedelta(days=1), time.min))
    return start.astimezone(pytz.utc), end.astimezone(pytz.utc)

def _money(value) -> str:
    return f"{Decimal(str(value or 0)):.2f}"

class ReportGenerator:
    """
    Builds the daily sales summary from the sales ledger.

    `generate()` never raises on database trouble; it returns None and the
    caller must read that as "report unavailable", not "no sales".
    """

    def __init__(self, session_factory=SessionLocal, timezone: str = None):
        self.session_factory = session_factory
        self.tz = pytz.timezone(timezone or settings.REPORT_TIMEZONE)

    def today(self) -> date:
        return datetime.now(self.tz).date()

    def generate(self, day: Optional[date] = None) -> Optional[str]:
        day = day or self.today()
        start, end = day_bounds(day, self.tz)

        session = self.session_factory()
        try:
            in_day = (Sale.created_at >= start, Sale.created_at < end)

            total_quantity = func.sum(Sale.quantity).label("total_quantity")
            top_products = (
                session.query(
                    Sale.product_name,
                    total_quantity,
                    func.sum(Sale.total).label("total_sales"),
                )
                .filter(*in_day)
                .group_by(Sale.product_name)
                .order_by(total_quantity.desc(), Sale.product_name)
                .limit(TOP_PRODUCTS_LIMIT)
                .all()
            )

            daily_revenue, total_orders = (
                session.query(
                    func.coalesce(func.sum(Sale.total), 0),
                    func.count(func.distinct(Sale.order_id)),
                )
                .filter(*in_day)
                .one()
            )
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to generate daily report: {e}")
            return None
        finally:
            session.close()

        return self._format(day, top_products, daily_revenue, total_orders)

    def _format(self, day: date, top_products, daily_revenue, total_orders) -> str:
        currency = settings.CURRENCY_SYMBOL

        message = f"📊 *Daily report - {day.strftime(settings.REPORT_DATE_FORMAT)}*\n\n"
        message += f"💰 *Total revenue:* {_money(daily_revenue)} {currency}\n"
        message += f"🛒 *Orders:* {total_orders}\n\n"
        message += f"🏆 *Top {TOP_PRODUCTS_LIMIT} products:*\n\n"

        if not top_products:
            message += NO_SALES_PLACEHOLDER
            return message

        for index, row in enumerate(top_products, start=1):
            message += f"{index}. *{row.product_name}*\n"
            message += f"   Quantity: {row.total_quantity} units\n"
            message += f"   Revenue: {_money(row.total_sales)} {currency}\n\n"
        return message
