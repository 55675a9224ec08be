# bookstore/api/routers/books.py
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.domain.schemas import BookCreate, BookOut, BookUpdate, QuantityIn
from bookstore.services.book_service import BookService

router = APIRouter(prefix="/books", tags=["books"])


def get_service(db: Session = Depends(get_db)) -> BookService:
    return BookService(db)


@router.get("/", response_model=List[BookOut])
def list_books(svc: BookService = Depends(get_service)):
    return svc.list_books()


@router.get("/sorted", response_model=List[BookOut])
def sort_books(
    direction: Literal["asc", "desc"] = Query("asc"),
    svc: BookService = Depends(get_service),
):
    return svc.sort_by_price(direction)


@router.get("/search", response_model=List[BookOut])
def search_books(
    keyword: str = Query(..., min_length=1),
    svc: BookService = Depends(get_service),
):
    try:
        return svc.search(keyword)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{book_id}", response_model=BookOut)
def get_book(book_id: int, svc: BookService = Depends(get_service)):
    try:
        return svc.get_book(book_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/", response_model=BookOut, status_code=201)
def add_book(payload: BookCreate, svc: BookService = Depends(get_service)):
    try:
        return svc.add_book(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{book_id}/quantity", response_model=BookOut)
def add_quantity(
    book_id: int,
    payload: QuantityIn,
    svc: BookService = Depends(get_service),
):
    try:
        return svc.add_quantity(book_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{book_id}", response_model=BookOut)
def update_book(
    book_id: int,
    payload: BookUpdate,
    svc: BookService = Depends(get_service),
):
    try:
        return svc.update_book(book_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{book_id}", status_code=204)
def delete_book(book_id: int, svc: BookService = Depends(get_service)):
    try:
        svc.delete_book(book_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)
