"""Wishlist endpoints and access rules"""

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError

from wishlist_api.domain.wishlists.repository import WishlistRepository


def test_create_wishlist(client, user, user_headers):
    response = client.post(
        "/api/wishlist",
        json={"name": "  Birthday  ", "preferences": {"currency": "EUR"}},
        headers=user_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Birthday"
    assert body["userId"] == user.id
    assert body["preferences"] == {"currency": "EUR"}
    assert body["privacy"] == "Public"
    assert body["statusId"] == "active"
    assert body["itemCount"] == 0
    assert body["version"] == 1


def test_create_wishlist_validation(client, user_headers):
    assert client.post("/api/wishlist", json={"name": "   "}, headers=user_headers).status_code == 422
    assert (
        client.post(
            "/api/wishlist", json={"name": "X", "privacy": "Secret"}, headers=user_headers
        ).status_code
        == 422
    )


def test_owner_reads_own_private_wishlist(client, user_headers, make_wishlist):
    wishlist = make_wishlist(user_headers)

    response = client.get(f"/api/wishlist/{wishlist['id']}", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Birthday"


def test_private_wishlist_hidden_from_others(client, user_headers, other_headers, make_wishlist):
    wishlist = make_wishlist(user_headers, privacy="Private")

    response = client.get(f"/api/wishlist/{wishlist['id']}", headers=other_headers)

    assert response.status_code == 403


def test_public_wishlist_readable_not_writable_by_others(
    client, user_headers, other_headers, make_wishlist
):
    wishlist = make_wishlist(user_headers, privacy="Public", items=["Kite"])

    assert client.get(f"/api/wishlist/{wishlist['id']}", headers=other_headers).status_code == 200
    assert client.get(f"/api/wishlist/{wishlist['id']}/item", headers=other_headers).status_code == 200
    assert (
        client.put(
            f"/api/wishlist/{wishlist['id']}", json={"name": "Mine now"}, headers=other_headers
        ).status_code
        == 403
    )
    assert (
        client.post(
            f"/api/wishlist/{wishlist['id']}/item", json={"name": "Pony"}, headers=other_headers
        ).status_code
        == 403
    )


def test_admin_reads_any_wishlist(client, user_headers, admin_headers, make_wishlist):
    wishlist = make_wishlist(user_headers, privacy="Private")
    assert client.get(f"/api/wishlist/{wishlist['id']}", headers=admin_headers).status_code == 200


def test_missing_wishlist(client, user_headers):
    assert client.get("/api/wishlist/4242", headers=user_headers).status_code == 404


def test_update_wishlist(client, user_headers, make_wishlist):
    wishlist = make_wishlist(user_headers)

    response = client.put(
        f"/api/wishlist/{wishlist['id']}",
        json={"name": "Christmas", "privacy": "Public"},
        headers=user_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Christmas"
    assert body["privacy"] == "Public"
    assert body["version"] == wishlist["version"] + 1


def test_my_wishlists(client, user_headers, other_headers, make_wishlist):
    make_wishlist(user_headers, name="Zoo trip")
    make_wishlist(user_headers, name="Anniversary")
    make_wishlist(other_headers, name="Not mine")

    body = client.get("/api/wishlist/mine", headers=user_headers).json()

    assert body["count"] == 2
    assert [w["name"] for w in body["data"]] == ["Anniversary", "Zoo trip"]


def test_admin_lists_and_pages_wishlists(client, admin_headers, user_headers, make_wishlist):
    for name in ("A", "B", "C"):
        make_wishlist(user_headers, name=name)

    everything = client.get("/api/wishlist", headers=admin_headers).json()
    page = client.get("/api/wishlist/page/1/1", headers=admin_headers).json()

    assert everything["count"] == 3
    assert page["count"] == 3
    assert [w["name"] for w in page["data"]] == ["B"]


def test_delete_wishlist_removes_items(client, admin_headers, user_headers, make_wishlist):
    wishlist = make_wishlist(user_headers, items=["Kite", "Book"])

    response = client.delete(f"/api/wishlist/{wishlist['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/api/wishlist/{wishlist['id']}", headers=admin_headers).status_code == 404
    assert client.get(f"/api/wishlist/{wishlist['id']}/item", headers=admin_headers).status_code == 404


def test_only_admin_deletes_wishlists(client, user_headers, make_wishlist):
    wishlist = make_wishlist(user_headers)
    assert client.delete(f"/api/wishlist/{wishlist['id']}", headers=user_headers).status_code == 403


def test_delete_wishlist_version_conflict(client, admin_headers, user_headers, make_wishlist, monkeypatch):
    wishlist = make_wishlist(user_headers, items=["Kite"])

    def stale_delete(db, wishlist):
        raise StaleDataError("UPDATE statement on table 'wishlists' expected to update 1 row(s)")

    monkeypatch.setattr(WishlistRepository, "delete_wishlist", staticmethod(stale_delete))

    response = client.delete(f"/api/wishlist/{wishlist['id']}", headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["error"] == "ConcurrentModification"
    monkeypatch.undo()
    assert client.get(f"/api/wishlist/{wishlist['id']}", headers=admin_headers).status_code == 200


def test_delete_wishlist_store_failure(client, admin_headers, user_headers, make_wishlist, monkeypatch):
    wishlist = make_wishlist(user_headers)

    def broken_delete(db, wishlist):
        raise OperationalError("DELETE ...", {}, Exception("database is locked"))

    monkeypatch.setattr(WishlistRepository, "delete_wishlist", staticmethod(broken_delete))

    response = client.delete(f"/api/wishlist/{wishlist['id']}", headers=admin_headers)

    assert response.status_code == 503
    assert response.json()["error"] == "StoreUnavailable"
