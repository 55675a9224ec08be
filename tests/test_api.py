from decimal import Decimal


ADDRESS = {
    "address": "12 Baker Street",
    "city": "Pune",
    "state": "Maharashtra",
    "landmark": "Near the park",
    "pincode": "411001",
    "address_type": "home",
}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_place_order_response_shape(client, notifier, make_user, make_book, make_address):
    make_user(1)
    make_book(quantity=5, price="12.50")
    address = make_address(1)

    resp = client.post(
        "/placeorder",
        params={"user_id": 1},
        json={"address_id": address.id, "name": "Dune", "quantity": 2},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["Quantity"] == 2
    assert Decimal(str(body["Total_Price"])) == Decimal("25.00")
    assert body["OrderId"]
    assert len(notifier.sent) == 1

    order = client.get(f"/orders/{body['OrderId']}", params={"user_id": 1})
    assert order.status_code == 200
    assert order.json()["quantity"] == 2


def test_place_order_business_errors(client, make_user, make_book, make_address):
    make_user(1)
    make_book(quantity=1)
    address = make_address(1)

    missing_book = client.post(
        "/placeorder", params={"user_id": 1}, json={"address_id": address.id, "name": "Emma", "quantity": 1}
    )
    no_stock = client.post(
        "/placeorder", params={"user_id": 1}, json={"address_id": address.id, "name": "Dune", "quantity": 2}
    )
    bad_address = client.post(
        "/placeorder", params={"user_id": 1}, json={"address_id": 999, "name": "Dune", "quantity": 1}
    )

    assert missing_book.status_code == 401
    assert missing_book.json()["error"] == "BookNotFound"
    assert no_stock.json()["error"] == "InsufficientStock"
    assert bad_address.json()["error"] == "AddressNotFound"


def test_place_order_validation(client):
    resp = client.post("/placeorder", params={"user_id": 1}, json={"address_id": 1, "name": "Dune", "quantity": 0})
    assert resp.status_code == 422


def test_cart_checkout_flow(client, notifier, make_user, make_book, make_address):
    make_user(1)
    dune = make_book("Dune", price="10.00", quantity=5)
    emma = make_book("Emma", author="Jane Austen", price="5.00", quantity=5)
    address = make_address(1)

    assert client.post("/cart/items", params={"user_id": 1}, json={"book_id": dune.id, "quantity": 2}).status_code == 201
    assert client.post("/cart/items", params={"user_id": 1}, json={"book_id": emma.id}).status_code == 201

    cart = client.get("/cart/", params={"user_id": 1}).json()
    assert Decimal(str(cart["total"])) == Decimal("25.00")

    resp = client.post("/placeorderbycartid", json={"address_id": address.id, "user_id": 1})

    assert resp.status_code == 201
    body = resp.json()
    assert Decimal(str(body["Total_Price"])) == Decimal("25.00")
    assert [line["BookId"] for line in body["Orders"]] == [dune.id, emma.id]
    assert len(notifier.sent) == 2
    assert client.get("/cart/", params={"user_id": 1}).json()["items"] == []
    assert len(client.get("/orders", params={"user_id": 1}).json()) == 2


def test_empty_cart_checkout(client, make_user, make_address):
    make_user(1)
    address = make_address(1)

    resp = client.post("/placeorderbycartid", json={"address_id": address.id, "user_id": 1})

    assert resp.status_code == 401
    assert resp.json() == {"error": "EmptyCart", "message": "There is nothing in the cart"}


def test_checkout_conflict(client, lock, make_user, make_book, make_address, add_to_cart):
    make_user(1)
    add_to_cart(1, make_book(), 1)
    address = make_address(1)
    lock.held[1] = "someone"

    resp = client.post("/placeorderbycartid", json={"address_id": address.id, "user_id": 1})

    assert resp.status_code == 409
    assert resp.json()["error"] == "CheckoutConflict"


def test_cart_errors(client, make_user, make_book, add_to_cart):
    make_user(1)
    make_user(2)
    item = add_to_cart(1, make_book(), 1)

    assert client.post("/cart/items", params={"user_id": 1}, json={"book_id": 999}).status_code == 404
    assert client.post(f"/cart/items/{item.id}/increment", params={"user_id": 2}).status_code == 403
    assert client.delete("/cart/items/999", params={"user_id": 1}).status_code == 404


def test_books_endpoints(client):
    created = client.post("/books/", json={"name": "Dune", "author": "Frank Herbert", "price": "12.50", "quantity": 1})
    assert created.status_code == 201
    book_id = created.json()["id"]
    client.post("/books/", json={"name": "Emma", "author": "Jane Austen", "price": "3.00", "quantity": 1})

    assert client.post("/books/", json={"name": "Dune", "author": "X", "price": "1.00"}).status_code == 400
    assert [b["name"] for b in client.get("/books/sorted", params={"direction": "asc"}).json()] == ["Emma", "Dune"]
    assert [b["name"] for b in client.get("/books/search", params={"keyword": "herbert"}).json()] == ["Dune"]
    assert client.post(f"/books/{book_id}/quantity", json={"quantity": 4}).json()["quantity"] == 5
    assert client.get("/books/999").status_code == 404


def test_update_and_delete_book(client, make_user, make_book, make_address):
    dune = make_book("Dune", quantity=3)
    emma = make_book("Emma", author="Jane Austen", quantity=3)

    updated = client.put(f"/books/{dune.id}", json={"description": "Spice", "quantity": 8})
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 8
    assert updated.json()["name"] == "Dune"

    assert client.put(f"/books/{emma.id}", json={"name": "Dune"}).status_code == 400
    assert client.put("/books/999", json={"author": "Nobody"}).status_code == 404

    make_user(1)
    address = make_address(1)
    client.post("/placeorder", params={"user_id": 1}, json={"address_id": address.id, "name": "Dune", "quantity": 1})

    assert client.delete(f"/books/{dune.id}").status_code == 400
    assert client.delete(f"/books/{emma.id}").status_code == 204
    assert client.get(f"/books/{emma.id}").status_code == 404
    assert client.delete("/books/999").status_code == 404


def test_address_endpoints(client, make_user):
    make_user(1)

    created = client.post("/addresses/", params={"user_id": 1}, json=ADDRESS)
    assert created.status_code == 201
    address_id = created.json()["id"]

    updated = client.put(f"/addresses/{address_id}", params={"user_id": 1}, json={**ADDRESS, "city": "Mumbai"})
    assert updated.json()["city"] == "Mumbai"

    assert client.put(f"/addresses/{address_id}", params={"user_id": 2}, json=ADDRESS).status_code == 403
    assert client.delete(f"/addresses/{address_id}", params={"user_id": 1}).status_code == 204
    assert client.get("/addresses/", params={"user_id": 1}).json() == []


def test_wishlist_to_cart(client, make_user, make_book):
    make_user(1)
    book = make_book()

    listed = client.post("/wishlist/", params={"user_id": 1}, json={"book_id": book.id})
    assert listed.status_code == 201
    entry_id = listed.json()[0]["id"]

    moved = client.post(f"/cart/items/from-wishlist/{entry_id}", params={"user_id": 1})
    assert moved.status_code == 201
    assert [i["book_id"] for i in moved.json()["items"]] == [book.id]


def test_users_endpoints(client):
    assert client.post("/users/", json={"id": 3, "name": "Ada"}).status_code == 200
    assert client.get("/users/3").json()["name"] == "Ada"
    assert client.get("/users/4").status_code == 404
    assert client.post("/users/", json={"id": 4, "name": "Bo", "email": "ada@example.com"}).status_code == 200
    assert client.post("/users/", json={"id": 5, "name": "Cy", "email": "ada@example.com"}).status_code == 400
