"""Notification catalog"""

from wishlist_api.models import SettingNotificationAction, WishlistAppSettings


def _create_notification(client, headers, name="Item purchased", actions=("Open", "Mute")):
    response = client.post(
        "/api/notification",
        json={"name": name, "actions": [{"name": a} for a in actions]},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


def test_create_notification_with_actions(client, admin_headers):
    created = _create_notification(client, admin_headers)

    assert created["channel"] == "push"
    assert created["statusId"] == "active"
    assert [a["name"] for a in created["actions"]] == ["Open", "Mute"]
    assert all(a["enabledByDefault"] for a in created["actions"])


def test_duplicate_name(client, admin_headers):
    _create_notification(client, admin_headers)

    response = client.post("/api/notification", json={"name": "Item purchased"}, headers=admin_headers)

    assert response.status_code == 409


def test_unknown_channel(client, admin_headers):
    response = client.post(
        "/api/notification", json={"name": "Fax", "channel": "fax"}, headers=admin_headers
    )
    assert response.status_code == 422


def test_catalog_writes_are_admin_only(client, admin_headers, user_headers):
    created = _create_notification(client, admin_headers)

    assert client.post("/api/notification", json={"name": "x"}, headers=user_headers).status_code == 403
    assert (
        client.put(f"/api/notification/{created['id']}", json={"name": "y"}, headers=user_headers).status_code
        == 403
    )
    assert client.delete(f"/api/notification/{created['id']}", headers=user_headers).status_code == 403
    assert client.get("/api/notification", headers=user_headers).status_code == 403


def test_user_can_read_single_notification(client, admin_headers, user_headers):
    created = _create_notification(client, admin_headers)

    plain = client.get(f"/api/notification/{created['id']}", headers=user_headers)
    details = client.get(f"/api/notification/{created['id']}/details", headers=user_headers)

    assert plain.status_code == 200
    assert "actions" not in plain.json()
    assert len(details.json()["actions"]) == 2


def test_list_details_and_page(client, admin_headers):
    for name in ("Price drop", "Back in stock", "Item purchased"):
        _create_notification(client, admin_headers, name=name, actions=("Open",))

    listed = client.get("/api/notification", headers=admin_headers).json()
    assert listed["count"] == 3
    assert [n["name"] for n in listed["data"]] == ["Back in stock", "Item purchased", "Price drop"]

    details = client.get("/api/notification/details", headers=admin_headers).json()
    assert all(len(n["actions"]) == 1 for n in details["data"])

    page = client.get("/api/notification/page/2/10", headers=admin_headers).json()
    assert [n["name"] for n in page["data"]] == ["Price drop"]


def test_update_replaces_actions(client, admin_headers):
    created = _create_notification(client, admin_headers)

    response = client.put(
        f"/api/notification/{created['id']}",
        json={"description": "Someone bought an item", "actions": [{"name": "Thank"}]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Item purchased"
    assert body["description"] == "Someone bought an item"
    assert [a["name"] for a in body["actions"]] == ["Thank"]


def test_update_without_actions_keeps_them(client, admin_headers):
    created = _create_notification(client, admin_headers)

    response = client.put(
        f"/api/notification/{created['id']}", json={"statusId": "inactive"}, headers=admin_headers
    )

    assert [a["id"] for a in response.json()["actions"]] == [a["id"] for a in created["actions"]]


def test_replacing_actions_drops_their_opt_ins(client, db, admin_headers, user_headers):
    created = _create_notification(client, admin_headers)
    settings = client.get("/api/wishlist/settings/mine", headers=user_headers).json()
    action_id = created["actions"][0]["id"]
    client.put(
        f"/api/wishlist/settings/{settings['id']}/notification/{created['id']}/action/{action_id}",
        json={"enabled": False},
        headers=user_headers,
    )

    client.put(
        f"/api/notification/{created['id']}", json={"actions": [{"name": "Thank"}]}, headers=admin_headers
    )

    assert db.query(SettingNotificationAction).filter_by(action_id=action_id).count() == 0


def test_delete_notification_drops_opt_ins(client, db, admin_headers, user_headers):
    created = _create_notification(client, admin_headers)
    settings = client.get("/api/wishlist/settings/mine", headers=user_headers).json()
    client.put(
        f"/api/wishlist/settings/{settings['id']}/notification/{created['id']}",
        json={"enabled": False},
        headers=user_headers,
    )
    client.put(
        f"/api/wishlist/settings/{settings['id']}/emailNotification/{created['id']}",
        json={"enabled": False},
        headers=user_headers,
    )

    response = client.delete(f"/api/notification/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/api/notification/{created['id']}", headers=admin_headers).status_code == 404
    row = db.query(WishlistAppSettings).filter_by(id=settings["id"]).one()
    assert row.notifications == []
    assert row.email_notifications == []

    mine = client.get("/api/wishlist/settings/mine", headers=user_headers).json()
    assert mine["notifications"] == []
