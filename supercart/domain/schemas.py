# supercart/domain/schemas.py
import math
from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def _check_prices(prices: Dict[str, float]) -> Dict[str, float]:
    for market, price in prices.items():
        if not market.strip():
            raise ValueError("Supermarket name must not be empty")
        if not math.isfinite(price):
            raise ValueError(f"Price for {market} must be a finite number")
        if price < 0:
            raise ValueError(f"Price for {market} must be >= 0")
    return prices


# supermarket -> price
Prices = Annotated[Dict[str, float], AfterValidator(_check_prices)]


# ---------------------------------------------------------------- users / auth

class RegisterIn(BaseModel):
    """Schema for account registration."""

    name: str = Field(..., min_length=2, max_length=30)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=8)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v


class LoginIn(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRead(BaseModel):
    """Schema for a user (response), never carries the password hash."""

    id: int
    name: str
    email: str
    is_admin: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    success: bool = True
    token: str
    user: UserRead


# ---------------------------------------------------------------- products

class ProductCreate(BaseModel):
    """Schema for creating a product (admin)."""

    id: int = Field(..., gt=0, description="Public numeric product id")
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    prices: Prices
    description: Optional[str] = None
    unit: str = "unit"
    image_url: Optional[str] = None


class ProductUpdate(BaseModel):
    """Partial product update; only the fields sent are changed."""

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    prices: Optional[Prices] = None
    unit: Optional[str] = None
    popularity: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    rating: Optional[float] = Field(None, ge=0, le=5)


class RateIn(BaseModel):
    score: int = Field(..., ge=1, le=5)


class ProductOut(BaseModel):
    pk: int
    id: int
    name: str
    category: str
    description: Optional[str] = None
    image_url: str
    prices: Dict[str, float]
    unit: str
    popularity: float
    rating: float
    rating_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------- carts

class CartItemIn(BaseModel):
    """
    A cart line item as sent by the client.

    ``prices`` may be omitted for catalogue products, in which case the
    product's current prices are copied in when the cart is saved.
    """

    id: int = Field(..., description="Public product id")
    name: Optional[str] = None
    quantity: int = Field(..., ge=1)
    prices: Optional[Prices] = None


class CartCreate(BaseModel):
    name: Optional[str] = None
    items: Optional[List[CartItemIn]] = None


class CartUpdate(BaseModel):
    name: Optional[str] = None
    items: Optional[List[CartItemIn]] = None


class CartItemsIn(BaseModel):
    items: List[CartItemIn]


class CartItemOut(BaseModel):
    id: int
    name: str
    quantity: int
    prices: Dict[str, float]


class CartOut(BaseModel):
    id: int
    user_id: int
    name: str
    items: List[CartItemOut]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CartTotalsOut(BaseModel):
    totals: Dict[str, float]
    cheapest: Optional[str] = None


class MessageOut(BaseModel):
    message: str
