# bookstore/services/user_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bookstore.data.models.user import UserModel
from bookstore.domain.schemas import UserCreate, UserRead
from bookstore.repos.user_repo import UserRepo
from bookstore.utils.logging import get_logger

logger = get_logger(__name__)

EMAIL_TAKEN = "Email is already used by another user"


class UserService:
    """
    Users are registered by the auth service upstream,
    here they are only mirrored for ownership checks and notification mail.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate) -> UserRead:
        # repeated registration of the same id returns the stored user unchanged
        known = self.repo.get_user(payload.id)
        if known:
            return UserRead.model_validate(known)

        if payload.email and self.repo.get_user_by_email(payload.email):
            raise ValueError(EMAIL_TAKEN)

        try:
            user = self.repo.add_user(UserModel(**payload.model_dump()))
        except IntegrityError:
            self.repo.rollback()
            raise ValueError(EMAIL_TAKEN)

        logger.info(f"User {user.id} registered as {user.role}")
        return UserRead.model_validate(user)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if user is None:
            raise LookupError("User not found")
        return UserRead.model_validate(user)
