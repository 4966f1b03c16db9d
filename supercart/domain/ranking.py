"""
Top-products ranking.

``rank`` orders an in-memory product snapshot by one of a fixed set of
criteria and truncates it to ``limit``. Unknown criteria fall back to
ordering by name. Products without any price are left out of the
price-based criteria. Python's sort is stable, so equal keys keep their
input order, including for the descending criteria.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Sequence

from supercart.domain.entities import Product


class Criterion(str, Enum):
    CHEAPEST = "cheapest"
    HIGHEST_DIFFERENT = "highest_different"
    MOST_SELECTED = "most_selected"
    HIGHEST_RATED = "highest_rated"
    NAME = "name"


class _Rule(NamedTuple):
    key: Callable[[Product], object]
    descending: bool
    needs_prices: bool


def _min_price(product: Product) -> float:
    return min(product.prices.values())


def _price_spread(product: Product) -> float:
    values = product.prices.values()
    return max(values) - min(values)


_RULES: Dict[Criterion, _Rule] = {
    Criterion.CHEAPEST: _Rule(_min_price, descending=False, needs_prices=True),
    Criterion.HIGHEST_DIFFERENT: _Rule(_price_spread, descending=True, needs_prices=True),
    Criterion.MOST_SELECTED: _Rule(lambda p: p.popularity, descending=True, needs_prices=False),
    Criterion.HIGHEST_RATED: _Rule(lambda p: p.rating, descending=True, needs_prices=False),
    Criterion.NAME: _Rule(lambda p: p.name, descending=False, needs_prices=False),
}


def parse_criterion(value: str | None) -> Criterion:
    """Case-sensitive lookup; anything unrecognised means ``Criterion.NAME``."""
    try:
        return Criterion(value)
    except ValueError:
        return Criterion.NAME


def rank(products: Sequence[Product], criterion: str | None, limit: int) -> List[Product]:
    if limit <= 0:
        return []

    rule = _RULES[parse_criterion(criterion)]
    pool = [p for p in products if p.prices] if rule.needs_prices else list(products)
    ordered = sorted(pool, key=rule.key, reverse=rule.descending)
    return ordered[:limit]
