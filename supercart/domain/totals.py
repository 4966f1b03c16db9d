# supercart/domain/totals.py
from __future__ import annotations

from decimal import Decimal
from numbers import Real
from typing import Dict, Iterable

from supercart.domain.entities import CartLineItem
from supercart.domain.errors import MalformedPriceError


def _check_price(market: str, price) -> None:
    # bool is an int subclass but never a price; Decimal is not registered as Real
    if isinstance(price, bool) or not isinstance(price, (Real, Decimal)):
        raise MalformedPriceError(market, price)


def totals(items: Iterable[CartLineItem]) -> Dict[str, float]:
    """
    Per-supermarket cost of the given line items.

    Each item adds ``price * quantity`` to every market in its own price
    snapshot. A market only listed by some items accumulates from those
    items alone. Nothing is rounded here.

    Prices of one market must all be floats/ints or all be ``Decimal``;
    a mix cannot be added and is reported as ``MalformedPriceError``.
    """
    result: Dict[str, float] = {}
    for item in items:
        for market, price in item.prices.items():
            _check_price(market, price)
            try:
                result[market] = result.get(market, 0) + price * item.quantity
            except TypeError:
                raise MalformedPriceError(market, price) from None
    return result


def cheapest_market(market_totals: Dict[str, float]) -> str | None:
    if not market_totals:
        return None
    return min(market_totals, key=market_totals.get)
