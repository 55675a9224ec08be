# bookstore/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from bookstore.data.database import get_db
from bookstore.domain.schemas import AddressIn, AddressOut
from bookstore.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


def get_service(db: Session = Depends(get_db)) -> AddressService:
    return AddressService(db)


@router.post("/", response_model=AddressOut, status_code=201)
def add_address(
    payload: AddressIn,
    user_id: int = Query(...),
    svc: AddressService = Depends(get_service),
):
    return svc.add_address(user_id, payload)


@router.get("/", response_model=List[AddressOut])
def get_addresses(
    user_id: int = Query(...),
    svc: AddressService = Depends(get_service),
):
    return svc.get_addresses(user_id)


@router.put("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    payload: AddressIn,
    user_id: int = Query(...),
    svc: AddressService = Depends(get_service),
):
    try:
        return svc.update_address(user_id, address_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.delete("/{address_id}", status_code=204)
def delete_address(
    address_id: int,
    user_id: int = Query(...),
    svc: AddressService = Depends(get_service),
):
    try:
        svc.delete_address(user_id, address_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return Response(status_code=204)
