from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.domain.schemas import WishlistIn, WishlistItemOut
from bookstore.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


@router.get("/", response_model=List[WishlistItemOut])
def get_wishlist(
    user_id: int = Query(...),
    svc: WishlistService = Depends(get_service),
):
    return svc.get_wishlist(user_id)


@router.post("/", response_model=List[WishlistItemOut], status_code=201)
def add_to_wishlist(
    payload: WishlistIn,
    user_id: int = Query(...),
    svc: WishlistService = Depends(get_service),
):
    try:
        return svc.add_book(user_id, payload.book_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{item_id}", response_model=List[WishlistItemOut])
def remove_from_wishlist(
    item_id: int,
    user_id: int = Query(...),
    svc: WishlistService = Depends(get_service),
):
    try:
        return svc.remove_item(user_id, item_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
