from sqlalchemy import Column, Integer, ForeignKey, String

from bookstore.data.database import Base


class AddressModel(Base):
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    address = Column(String(600), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    landmark = Column(String(100), nullable=False)
    pincode = Column(String(10), nullable=False)
    address_type = Column(String(100), nullable=False)
