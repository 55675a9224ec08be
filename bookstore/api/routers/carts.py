# bookstore/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.domain.schemas import CartItemIn, CartOut
from bookstore.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def _call(fn, *args):
    try:
        return fn(*args)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/", response_model=CartOut)
def get_cart(
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return svc.get_cart(user_id)


@router.post("/items", response_model=CartOut, status_code=201)
def add_item(
    payload: CartItemIn,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return _call(svc.add_book, user_id, payload.book_id, payload.quantity)


@router.post("/items/from-wishlist/{wishlist_id}", response_model=CartOut, status_code=201)
def add_item_from_wishlist(
    wishlist_id: int,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return _call(svc.add_from_wishlist, user_id, wishlist_id)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return _call(svc.remove_item, user_id, item_id)


@router.post("/items/{item_id}/increment", response_model=CartOut)
def increment_item(
    item_id: int,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return _call(svc.increment, user_id, item_id)


@router.post("/items/{item_id}/decrement", response_model=CartOut)
def decrement_item(
    item_id: int,
    user_id: int = Query(...),
    svc: CartService = Depends(get_service),
):
    return _call(svc.decrement, user_id, item_id)
