from pydantic import BaseModel, ConfigDict, Field
from decimal import Decimal
from typing import List, Optional

from spice_shop.services.pricing import parse_price


class CartLine(BaseModel):
    """One product's accumulated selection, as persisted under the cart key."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    price: str
    weight: str
    quantity: int = Field(ge=1)

    @property
    def unit_price(self) -> Decimal:
        return parse_price(self.price)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class CartTotals(BaseModel):
    item_count: int
    amount: Decimal


class CartItemAdd(BaseModel):
    product_id: int


class CartQuantityChange(BaseModel):
    delta: int


class CartItemResponse(BaseModel):
    id: int
    name: str
    price: str
    weight: str
    quantity: int
    subtotal: Decimal


class CartResponse(BaseModel):
    items: List[CartItemResponse]
    item_count: int
    total: Decimal
    total_display: str
    just_added_id: Optional[int] = None
