# every model imported here so SQLAlchemy registers it in Base.metadata

from bookstore.data.models.user import UserModel
from bookstore.data.models.book import BookModel
from bookstore.data.models.address import AddressModel
from bookstore.data.models.cart_item import CartItemModel
from bookstore.data.models.wishlist_item import WishlistItemModel
from bookstore.data.models.order import OrderModel

__all__ = [
    "UserModel",
    "BookModel",
    "AddressModel",
    "CartItemModel",
    "WishlistItemModel",
    "OrderModel",
]
