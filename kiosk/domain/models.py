import json
from datetime import datetime

import pytz
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, DateTime

from kiosk.core.config import settings
from kiosk.infrastructure.database import Base

ORDER_STATUSES = ("pending", "completed", "cancelled")

def utcnow() -> datetime:
    return datetime.now(pytz.utc)

class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image_url = Column(String, default="")
    category = Column(String, default=settings.DEFAULT_CATEGORY)
    in_stock = Column(Boolean, nullable=False, default=True)

class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, index=True)
    total_amount = Column(Numeric(10, 2), nullable=False)
    delivery_type = Column(String)
    shipping_location = Column(String)
    is_custom_location = Column(Boolean, default=False)
    payment_method = Column(String)

    # Line items live inside the order as JSON text; the sales table is the
    # normalized copy used for reporting.
    items = Column(Text, nullable=False, default="[]")

    status = Column(String, nullable=False, default="pending")  # pending, completed, cancelled
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    @property
    def line_items(self) -> list:
        return json.loads(self.items) if self.items else []

class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, index=True)  # no FK, sales outlive deleted orders
    product_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
