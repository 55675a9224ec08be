# bookstore/repos/user_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def add_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def rollback(self):
        self.db.rollback()
