from bookstore.data.models import BookModel
from bookstore.repos.book_repo import BookRepo


def test_decrement_within_stock(db, make_book):
    book = make_book(quantity=5)
    repo = BookRepo(db)

    assert repo.decrement_quantity(book.id, 5) is True
    repo.commit()

    assert db.get(BookModel, book.id).quantity == 0


def test_decrement_beyond_stock_changes_nothing(db, make_book):
    book = make_book(quantity=2)
    repo = BookRepo(db)

    assert repo.decrement_quantity(book.id, 3) is False
    repo.commit()

    assert db.get(BookModel, book.id).quantity == 2


def test_decrement_unknown_book(db):
    assert BookRepo(db).decrement_quantity(12345, 1) is False


def test_add_quantity(db, make_book):
    book = make_book(quantity=1)
    repo = BookRepo(db)

    assert repo.add_quantity(book.id, 4) == 1
    repo.commit()

    assert db.get(BookModel, book.id).quantity == 5


def test_find_by_name(db, make_book):
    make_book("Dune")
    repo = BookRepo(db)

    assert repo.get_book_by_name("Dune").author == "Frank Herbert"
    assert repo.get_book_by_name("Dun") is None


def test_list_sorted_by_price(db, make_book):
    make_book("Dune", price="12.50")
    make_book("Emma", author="Jane Austen", price="4.00")
    make_book("Ulysses", author="James Joyce", price="20.00")
    repo = BookRepo(db)

    assert [b.name for b in repo.list_books("asc")] == ["Emma", "Dune", "Ulysses"]
    assert [b.name for b in repo.list_books("desc")] == ["Ulysses", "Dune", "Emma"]
    assert [b.name for b in repo.list_books()] == ["Dune", "Emma", "Ulysses"]


def test_search_matches_name_author_and_description(db, make_book):
    make_book("Dune", description="Spice and sand")
    make_book("Emma", author="Jane Austen")
    repo = BookRepo(db)

    assert [b.name for b in repo.search_books("austen")] == ["Emma"]
    assert [b.name for b in repo.search_books("spice")] == ["Dune"]
    assert repo.search_books("tolkien") == []


def test_decrement_by_non_positive_amount_is_refused(db, make_book):
    book = make_book(quantity=2)
    repo = BookRepo(db)

    assert repo.decrement_quantity(book.id, -5) is False
    assert repo.decrement_quantity(book.id, 0) is False
    repo.commit()

    assert db.get(BookModel, book.id).quantity == 2
