# bookstore/services/address_service.py
from typing import List

from sqlalchemy.orm import Session

from bookstore.data.models.address import AddressModel
from bookstore.domain.schemas import AddressIn
from bookstore.repos.address_repo import AddressRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)


class AddressService:
    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def add_address(self, user_id: int, payload: AddressIn) -> AddressModel:
        address = self.repo.save(AddressModel(user_id=user_id, **payload.model_dump()))
        logger.info(f"Address {address.id} added for user {user_id}")
        return address

    def get_addresses(self, user_id: int) -> List[AddressModel]:
        return self.repo.get_addresses_by_user(user_id)

    def update_address(self, user_id: int, address_id: int, payload: AddressIn) -> AddressModel:
        address = self._owned(user_id, address_id)

        for field, value in payload.model_dump().items():
            setattr(address, field, value)

        updated = self.repo.save(address)
        logger.info(f"Address {address_id} updated for user {user_id}")
        return updated

    def delete_address(self, user_id: int, address_id: int):
        address = self._owned(user_id, address_id)
        self.repo.delete_address(address)
        logger.info(f"Address {address_id} deleted for user {user_id}")

    def _owned(self, user_id: int, address_id: int) -> AddressModel:
        address = self.repo.get_address(address_id)
        if not address:
            raise LookupError("Address not found")
        if address.user_id != user_id:
            raise PermissionError("No access to this address")
        return address
