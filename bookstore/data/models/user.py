from sqlalchemy import Column, Integer, String
from bookstore.data.database import Base


class UserModel(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=True)
    role = Column(String, nullable=False, default="user")  # user, admin
