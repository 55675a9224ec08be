# bookstore/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.domain.results import OrderError, OrderResult
from bookstore.domain.schemas import (
    PlaceOrderIn,
    PlaceOrderByCartIn,
    PlacedOrderOut,
    CartOrderOut,
    OrderOut,
)
from bookstore.services.lock_service import LockService
from bookstore.services.notification_service import NotificationService
from bookstore.services.order_service import OrderService

router = APIRouter(tags=["orders"])

# business failures keep the 401 the clients of this API already handle
ERROR_STATUS = {
    OrderError.BOOK_NOT_FOUND: 401,
    OrderError.INSUFFICIENT_STOCK: 401,
    OrderError.ADDRESS_NOT_FOUND: 401,
    OrderError.EMPTY_CART: 401,
    OrderError.CHECKOUT_CONFLICT: 409,
    OrderError.INVALID_QUANTITY: 400,
}


def get_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(
        db=db,
        notification_service=NotificationService(),
        lock_service=LockService(),
    )


def _error_response(result: OrderResult) -> JSONResponse:
    # flat body, clients read "error" and "message" at the top level
    return JSONResponse(
        status_code=ERROR_STATUS[result.error],
        content={"error": result.error.value, "message": result.message},
    )


@router.post("/placeorder", response_model=PlacedOrderOut, status_code=201)
def place_order(
    payload: PlaceOrderIn,
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    """
    Orders a single book by name.
    Mail with the order details goes out asynchronously.
    """
    result = svc.place_order(
        user_id=user_id,
        address_id=payload.address_id,
        book_name=payload.name,
        quantity=payload.quantity,
    )
    if not result.ok:
        return _error_response(result)
    return result.value


@router.post("/placeorderbycartid", response_model=CartOrderOut, status_code=201)
def place_order_by_cart(
    payload: PlaceOrderByCartIn,
    svc: OrderService = Depends(get_service),
):
    """
    Checks out every line of the user's cart, all or nothing.
    """
    result = svc.place_order_by_cart(user_id=payload.user_id, address_id=payload.address_id)
    if not result.ok:
        return _error_response(result)
    return result.value


@router.get("/orders", response_model=List[OrderOut])
def list_orders(
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    return svc.list_orders(user_id)


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
