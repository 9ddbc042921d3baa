import json
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

OrderStatus = Literal["pending", "completed", "cancelled"]

# ---------------------------
# Products
# ---------------------------
class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = None

class ProductUpdate(ProductIn):
    in_stock: Optional[bool] = None

class StockUpdate(BaseModel):
    # None flips the current flag
    in_stock: Optional[bool] = None

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    image_url: Optional[str] = ""
    category: Optional[str] = None
    in_stock: bool

# ---------------------------
# Orders
# ---------------------------
class LineItem(BaseModel):
    name: str
    quantity: int = Field(..., gt=0)
    price: float = Field(..., ge=0)  # unit price

class OrderIn(BaseModel):
    customer_name: str
    customer_phone: Optional[str] = None
    total_amount: float = Field(..., ge=0)
    delivery_type: Optional[str] = None
    shipping_location: Optional[str] = None
    is_custom_location: bool = False
    payment_method: Optional[str] = None
    items: List[LineItem]

class StatusUpdate(BaseModel):
    status: OrderStatus

class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    customer_phone: Optional[str] = None
    total_amount: float
    delivery_type: Optional[str] = None
    shipping_location: Optional[str] = None
    is_custom_location: bool = False
    payment_method: Optional[str] = None
    items: List[LineItem]
    status: str
    created_at: datetime

    @field_validator("items", mode="before")
    @classmethod
    def _decode_items(cls, value):
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value

# ---------------------------
# Sales ledger
# ---------------------------
class RecordOrderIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: int = Field(..., alias="orderId")
    items: List[LineItem]
    total: Optional[float] = None
