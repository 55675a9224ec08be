# bookstore/repos/book_repo.py
from sqlalchemy import select, update, or_
from sqlalchemy.orm import Session

from bookstore.data.models.book import BookModel


class BookRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_book(self, book_id: int) -> BookModel | None:
        return self.db.get(BookModel, book_id)

    def get_book_by_name(self, name: str) -> BookModel | None:
        return self.db.execute(
            select(BookModel).where(BookModel.name == name)
        ).scalar_one_or_none()

    def list_books(self, order_by_price: str | None = None) -> list[BookModel]:
        stmt = select(BookModel)
        if order_by_price == "asc":
            stmt = stmt.order_by(BookModel.price.asc(), BookModel.id)
        elif order_by_price == "desc":
            stmt = stmt.order_by(BookModel.price.desc(), BookModel.id)
        else:
            stmt = stmt.order_by(BookModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def search_books(self, keyword: str) -> list[BookModel]:
        pattern = f"%{keyword}%"
        stmt = (
            select(BookModel)
            .where(
                or_(
                    BookModel.name.ilike(pattern),
                    BookModel.author.ilike(pattern),
                    BookModel.description.ilike(pattern),
                )
            )
            .order_by(BookModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def create_book(self, book: BookModel) -> BookModel:
        self.db.add(book)
        self.db.commit()
        self.db.refresh(book)
        return book

    def update_book(self, book: BookModel, changes: dict) -> BookModel:
        for field, value in changes.items():
            setattr(book, field, value)
        self.db.commit()
        self.db.refresh(book)
        return book

    def delete_book(self, book: BookModel):
        self.db.delete(book)
        self.db.commit()

    def decrement_quantity(self, book_id: int, amount: int) -> bool:
        """
        Atomic check-and-decrement of stock in a single UPDATE.

        UPDATE books SET quantity = quantity - :n WHERE id = :id AND quantity >= :n
        0 rows affected means the stock would go negative (or the book is gone).
        A non-positive amount is refused, it would add stock instead.
        Does not commit, the caller owns the transaction.
        """
        if amount <= 0:
            return False

        result = self.db.execute(
            update(BookModel)
            .where(BookModel.id == book_id, BookModel.quantity >= amount)
            .values(quantity=BookModel.quantity - amount)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def add_quantity(self, book_id: int, amount: int) -> int:
        result = self.db.execute(
            update(BookModel)
            .where(BookModel.id == book_id)
            .values(quantity=BookModel.quantity + amount)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()
