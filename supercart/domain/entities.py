# supercart/domain/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

PriceMap = Dict[str, float]


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str
    prices: PriceMap = field(default_factory=dict)
    description: str | None = None
    unit: str = "unit"
    popularity: float = 0
    rating: float = 0
    rating_count: int = 0
    # storage key, only set for products read back from the database
    pk: int | None = None


@dataclass(frozen=True)
class CartLineItem:
    id: int
    name: str
    quantity: int
    prices: PriceMap = field(default_factory=dict)
