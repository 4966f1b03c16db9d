# supercart/repos/cart_repo.py
from typing import List

from sqlalchemy.orm import Session

from supercart.data.models.cart import CartModel
from supercart.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def list_by_user(self, user_id: int) -> List[CartModel]:
        return (
            self.db.query(CartModel)
            .filter(CartModel.user_id == user_id)
            .order_by(CartModel.created_at.desc(), CartModel.id.desc())
            .all()
        )

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        # UPDATE carts SET ... WHERE id = :id AND version = :old_version
        return (
            self.db.query(CartModel)
            .filter(CartModel.id == cart_id, CartModel.version == old_version)
            .update(new_data, synchronize_session=False)
        )

    def replace_items(self, cart: CartModel, items: List[CartItemModel]) -> None:
        # delete-orphan cascade removes the previous rows on flush
        cart.items = items

    def delete_cart(self, cart: CartModel) -> None:
        self.db.delete(cart)
        self.db.commit()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
