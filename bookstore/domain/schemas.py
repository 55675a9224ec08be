# bookstore/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime


# users
class UserCreate(BaseModel):
    """Schema for creating a user."""

    id: int = Field(..., gt=0, description="User ID (must be > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="User name")
    email: str | None = Field(None, max_length=255)
    role: Literal["user", "admin"] = "user"


class UserRead(BaseModel):
    id: int
    name: str
    email: str | None = None
    role: str

    model_config = ConfigDict(from_attributes=True)


# books
class BookCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(0, ge=0)


class BookUpdate(BaseModel):
    """Only the fields sent are changed."""

    name: str | None = Field(None, min_length=1, max_length=255)
    author: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    quantity: int | None = Field(None, ge=0)


class QuantityIn(BaseModel):
    quantity: int = Field(..., gt=0, description="Copies to add (must be > 0)")


class BookOut(BaseModel):
    id: int
    name: str
    author: str
    description: str | None = None
    price: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


# cart
class CartItemIn(BaseModel):
    """Schema for adding a book to the cart."""

    book_id: int = Field(..., gt=0, description="Book ID (must be > 0)")
    quantity: int = Field(1, gt=0, description="Quantity (must be > 0)")


class CartItemOut(BaseModel):
    id: int
    book_id: int
    name: str
    author: str
    price: Decimal
    quantity: int


class CartOut(BaseModel):
    user_id: int
    items: List[CartItemOut]
    total: Decimal


# wishlist
class WishlistIn(BaseModel):
    book_id: int = Field(..., gt=0)


class WishlistItemOut(BaseModel):
    id: int
    book_id: int
    name: str
    author: str
    price: Decimal


# addresses
class AddressIn(BaseModel):
    address: str = Field(..., min_length=2, max_length=600)
    city: str = Field(..., min_length=2, max_length=100)
    state: str = Field(..., min_length=2, max_length=100)
    landmark: str = Field(..., min_length=2, max_length=100)
    pincode: str = Field(..., min_length=2, max_length=10)
    address_type: str = Field(..., min_length=2, max_length=100)


class AddressOut(AddressIn):
    id: int
    user_id: int

    model_config = ConfigDict(from_attributes=True)


# orders
class PlaceOrderIn(BaseModel):
    """Schema for ordering a single book by name."""

    address_id: int = Field(..., gt=0, description="Shipping address ID (must be > 0)")
    name: str = Field(..., min_length=1, description="Book name")
    quantity: int = Field(..., gt=0, description="Quantity (must be > 0)")


class PlaceOrderByCartIn(BaseModel):
    """Schema for checking out the whole cart of a user."""

    address_id: int = Field(..., gt=0, description="Shipping address ID (must be > 0)")
    user_id: int = Field(..., gt=0, description="Cart owner ID (must be > 0)")


class PlacedOrderOut(BaseModel):
    message: str = "Order Successfully Placed..."
    order_id: str = Field(..., alias="OrderId")
    quantity: int = Field(..., alias="Quantity")
    total_price: Decimal = Field(..., alias="Total_Price")

    model_config = ConfigDict(populate_by_name=True)


class CartOrderLineOut(BaseModel):
    order_id: str = Field(..., alias="OrderId")
    book_id: int = Field(..., alias="BookId")
    quantity: int = Field(..., alias="Quantity")
    total_price: Decimal = Field(..., alias="Total_Price")

    model_config = ConfigDict(populate_by_name=True)


class CartOrderOut(BaseModel):
    message: str = "Order Successfully Placed..."
    total_price: Decimal = Field(..., alias="Total_Price")
    orders: List[CartOrderLineOut] = Field(..., alias="Orders")

    model_config = ConfigDict(populate_by_name=True)


class OrderOut(BaseModel):
    """Schema for a ledger entry (response)."""

    order_id: str
    user_id: int
    book_id: int
    address_id: int
    quantity: int
    total_price: Decimal
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
