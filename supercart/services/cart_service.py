# supercart/services/cart_service.py
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from sqlalchemy.orm import Session

from supercart.data.models.cart import CartModel
from supercart.data.models.cart_item import CartItemModel
from supercart.domain.entities import CartLineItem
from supercart.domain.errors import ConflictError
from supercart.domain.schemas import CartItemIn
from supercart.domain.totals import cheapest_market, totals
from supercart.repos.cart_repo import CartRepo
from supercart.repos.product_repo import ProductRepo
from supercart.services.lock_service import LockService
from supercart.services.popularity_service import PopularityService
from supercart.utils.logging import get_logger
from supercart.utils.settings import CART_LOCK_TTL_SECONDS

logger = get_logger(__name__)


def _default_name() -> str:
    return f"Cart {int(time.time() * 1000)}"


def _line_items(cart: CartModel) -> List[CartLineItem]:
    return [
        CartLineItem(id=i.product_id, name=i.name, quantity=i.quantity, prices=dict(i.prices or {}))
        for i in cart.items
    ]


def _present_totals(items: Sequence[CartLineItem]) -> Dict[str, Any]:
    market_totals = totals(items)
    return {
        # rounding is for display only
        "totals": {market: round(value, 2) for market, value in market_totals.items()},
        "cheapest": cheapest_market(market_totals),
    }


class CartService:
    """
    Saved carts of a single user.

    Queries (list, get, totals) only read. Commands (create, update, delete)
    check ownership first; update replaces the whole item list under a
    redis lock and an optimistic version check.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        popularity: PopularityService,
    ):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.lock_service = lock_service
        self.popularity = popularity

    # query
    def list_carts(self, user_id: int) -> List[Dict[str, Any]]:
        return [self._to_dict(c) for c in self.repo.list_by_user(user_id)]

    def get_cart(self, cart_id: int, user_id: int) -> Dict[str, Any]:
        return self._to_dict(self._owned_cart(cart_id, user_id))

    def cart_totals(self, cart_id: int, user_id: int) -> Dict[str, Any]:
        cart = self._owned_cart(cart_id, user_id)
        return _present_totals(_line_items(cart))

    def preview_totals(self, items: List[CartItemIn]) -> Dict[str, Any]:
        """Totals for a cart that has not been saved yet."""
        return _present_totals(self._snapshot(items))

    # commands
    def create_cart(self, user_id: int, name: str | None, items: List[CartItemIn] | None) -> Dict[str, Any]:
        if not items:
            raise ValueError("Cart items are required")

        lines = self._snapshot(items)
        cart = CartModel(
            user_id=user_id,
            name=(name or "").strip() or _default_name(),
            version=1,
            items=self._to_models(lines),
        )
        created = self.repo.create_cart(cart)

        logger.info(f"Saved cart {created.id} with {len(lines)} items for user {user_id}")
        self._record_selection(lines)
        return self._to_dict(created)

    def update_cart(
        self,
        user_id: int,
        cart_id: int,
        name: str | None,
        items: List[CartItemIn] | None,
    ) -> Dict[str, Any]:
        if items is None:
            raise ValueError("Valid cart items are required")

        cart = self._owned_cart(cart_id, user_id)
        lines = self._snapshot(items)

        token = self.lock_service.new_token()
        if not self.lock_service.acquire_cart_lock(cart_id, token, CART_LOCK_TTL_SECONDS):
            raise ConflictError("Cart is being updated by another request")

        try:
            rowcount = self.repo.update_cart_version(
                cart_id=cart.id,
                old_version=cart.version,
                new_data={
                    "name": (name or "").strip() or cart.name,
                    "version": cart.version + 1,
                    "updated_at": datetime.now(timezone.utc),
                },
            )

            # someone else saved in between: UPDATE ... WHERE version = old hit 0 rows
            if rowcount == 0:
                self.repo.rollback()
                raise ConflictError("Cart was modified by another request")

            self.repo.replace_items(cart, self._to_models(lines))
            self.repo.commit()
        finally:
            self.lock_service.release_cart_lock(cart_id, token)

        logger.info(f"Cart {cart_id} updated, new version: {cart.version}")
        self._record_selection(lines)
        return self.get_cart(cart_id, user_id)

    def delete_cart(self, user_id: int, cart_id: int) -> None:
        cart = self._owned_cart(cart_id, user_id)
        self.repo.delete_cart(cart)
        logger.info(f"Deleted cart {cart_id}")

    # helpers
    def _owned_cart(self, cart_id: int, user_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise LookupError("Cart not found")
        if cart.user_id != user_id:
            raise PermissionError("No access to this cart")
        return cart

    def _snapshot(self, items: List[CartItemIn]) -> List[CartLineItem]:
        """
        Turn request items into line items that own their prices.

        Prices sent by the client are kept as sent; otherwise the catalogue
        product's current prices are copied. Later catalogue edits never
        reach the copy.
        """
        catalogue = self.products.get_by_external_ids(i.id for i in items)
        lines = []
        for item in items:
            product = catalogue.get(item.id)
            name = item.name or (product.name if product else None)
            if not name:
                raise ValueError(f"Unknown product {item.id} needs a name")

            if item.prices is not None:
                prices = dict(item.prices)
            elif product is not None:
                prices = dict(product.prices or {})
            else:
                prices = {}

            lines.append(CartLineItem(id=item.id, name=name, quantity=item.quantity, prices=prices))
        return lines

    @staticmethod
    def _to_models(lines: List[CartLineItem]) -> List[CartItemModel]:
        return [
            CartItemModel(
                position=pos,
                product_id=line.id,
                name=line.name,
                quantity=line.quantity,
                prices=dict(line.prices),
            )
            for pos, line in enumerate(lines)
        ]

    def _record_selection(self, lines: List[CartLineItem]) -> None:
        known = self.products.get_by_external_ids(line.id for line in lines)
        selection = [(line.id, line.quantity) for line in lines if line.id in known]
        try:
            self.popularity.record_selection(selection)
        except Exception as e:
            # cart is already committed at this point
            logger.error(f"Failed to schedule popularity update: {e}")

    @staticmethod
    def _to_dict(cart: CartModel) -> Dict[str, Any]:
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "name": cart.name,
            "items": [
                {
                    "id": i.product_id,
                    "name": i.name,
                    "quantity": i.quantity,
                    "prices": dict(i.prices or {}),
                }
                for i in cart.items
            ],
            "created_at": cart.created_at,
            "updated_at": cart.updated_at,
        }
