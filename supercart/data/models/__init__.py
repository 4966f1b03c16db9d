# import all models so SQLAlchemy registers them in Base.metadata

from supercart.data.models.user import UserModel
from supercart.data.models.product import ProductModel
from supercart.data.models.cart import CartModel
from supercart.data.models.cart_item import CartItemModel

__all__ = ["UserModel", "ProductModel", "CartModel", "CartItemModel"]
