"""Wishlist app settings and notification opt-ins"""

import pytest


@pytest.fixture
def catalog(client, admin_headers):
    """One notification with two actions; the second is off by default"""
    response = client.post(
        "/api/notification",
        json={
            "name": "Item purchased",
            "actions": [{"name": "Open"}, {"name": "Thank", "enabledByDefault": False}],
        },
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def my_settings(client, user_headers):
    response = client.get("/api/wishlist/settings/mine", headers=user_headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_mine_creates_defaults_once(client, user, user_headers):
    first = client.get("/api/wishlist/settings/mine", headers=user_headers).json()
    second = client.get("/api/wishlist/settings/mine", headers=user_headers).json()

    assert first["id"] == second["id"]
    assert first["userId"] == user.id
    assert first["currency"] == "USD"
    assert first["language"] == "en"
    assert first["defaultPrivacy"] == "Public"
    assert first["pushEnabled"] is True


def test_settings_path_is_not_a_wishlist_id(client, user_headers):
    response = client.get("/api/wishlist/settings/mine", headers=user_headers)
    assert response.status_code == 200
    assert "currency" in response.json()


def test_catalog_defaults_are_reported(client, catalog, my_settings):
    [notification] = my_settings["notifications"]

    assert notification["notificationId"] == catalog["id"]
    assert notification["enabled"] is True
    assert [(a["name"], a["enabled"]) for a in notification["actions"]] == [
        ("Open", True),
        ("Thank", False),
    ]
    assert my_settings["emailNotifications"] == [
        {"notificationId": catalog["id"], "name": "Item purchased", "enabled": True}
    ]


def test_inactive_catalog_entries_are_hidden(client, admin_headers, catalog, user_headers):
    client.put(f"/api/notification/{catalog['id']}", json={"statusId": "inactive"}, headers=admin_headers)

    mine = client.get("/api/wishlist/settings/mine", headers=user_headers).json()

    assert mine["notifications"] == []


def test_update_settings(client, user_headers, my_settings):
    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}",
        json={"currency": "eur", "defaultPrivacy": "Private", "emailEnabled": False},
        headers=user_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["currency"] == "EUR"
    assert body["defaultPrivacy"] == "Private"
    assert body["emailEnabled"] is False
    assert body["language"] == "en"


@pytest.mark.parametrize(
    "payload",
    [{"currency": "EURO"}, {"defaultPrivacy": "Secret"}, {"language": "x"}],
)
def test_update_settings_validation(client, user_headers, my_settings, payload):
    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}", json=payload, headers=user_headers
    )
    assert response.status_code == 422


def test_other_users_settings_are_private(client, other_headers, my_settings):
    url = f"/api/wishlist/settings/{my_settings['id']}"

    assert client.get(url, headers=other_headers).status_code == 403
    assert client.put(url, json={"currency": "GBP"}, headers=other_headers).status_code == 403


def test_admin_reads_any_settings(client, admin_headers, my_settings):
    response = client.get(f"/api/wishlist/settings/{my_settings['id']}", headers=admin_headers)
    assert response.status_code == 200


def test_toggle_push_notification(client, user_headers, catalog, my_settings):
    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/{catalog['id']}",
        json={"enabled": False},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json()["notifications"][0]["enabled"] is False

    again = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/{catalog['id']}",
        json={"enabled": True},
        headers=user_headers,
    )
    assert again.json()["notifications"][0]["enabled"] is True


def test_toggle_action(client, user_headers, catalog, my_settings):
    thank = catalog["actions"][1]

    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/{catalog['id']}/action/{thank['id']}",
        json={"enabled": True},
        headers=user_headers,
    )

    assert response.status_code == 200
    [notification] = response.json()["notifications"]
    assert notification["enabled"] is True
    assert [a["enabled"] for a in notification["actions"]] == [True, True]


def test_action_must_belong_to_notification(client, admin_headers, user_headers, catalog, my_settings):
    other = client.post(
        "/api/notification",
        json={"name": "Price drop", "actions": [{"name": "View"}]},
        headers=admin_headers,
    ).json()
    foreign_action = other["actions"][0]["id"]

    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/{catalog['id']}/action/{foreign_action}",
        json={"enabled": False},
        headers=user_headers,
    )

    assert response.status_code == 404


def test_toggle_email_notification(client, user_headers, catalog, my_settings):
    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/emailNotification/{catalog['id']}",
        json={"enabled": False},
        headers=user_headers,
    )

    assert response.status_code == 200
    assert response.json()["emailNotifications"][0]["enabled"] is False
    assert response.json()["notifications"][0]["enabled"] is True


def test_toggle_unknown_notification(client, user_headers, my_settings):
    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/999",
        json={"enabled": False},
        headers=user_headers,
    )
    assert response.status_code == 404


def test_toggle_on_foreign_settings(client, other_headers, catalog, my_settings):
    response = client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/{catalog['id']}",
        json={"enabled": False},
        headers=other_headers,
    )
    assert response.status_code == 403


def test_admin_creates_settings(client, admin_headers, other_user):
    response = client.post(
        "/api/wishlist/settings",
        json={"userId": other_user.id, "currency": "GBP"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["currency"] == "GBP"

    duplicate = client.post(
        "/api/wishlist/settings", json={"userId": other_user.id}, headers=admin_headers
    )
    assert duplicate.status_code == 409


def test_create_settings_for_missing_account(client, admin_headers):
    response = client.post("/api/wishlist/settings", json={"userId": 9999}, headers=admin_headers)
    assert response.status_code == 404


def test_create_and_list_are_admin_only(client, user, user_headers):
    assert client.get("/api/wishlist/settings", headers=user_headers).status_code == 403
    assert (
        client.post("/api/wishlist/settings", json={"userId": user.id}, headers=user_headers).status_code
        == 403
    )


def test_list_and_page(client, admin_headers, user_headers, other_headers):
    client.get("/api/wishlist/settings/mine", headers=user_headers)
    client.get("/api/wishlist/settings/mine", headers=other_headers)

    listed = client.get("/api/wishlist/settings", headers=admin_headers).json()
    page = client.get("/api/wishlist/settings/page/1/5", headers=admin_headers).json()

    assert listed["count"] == 2
    assert page["count"] == 2
    assert len(page["data"]) == 1


def test_delete_settings(client, admin_headers, user_headers, catalog, my_settings):
    client.put(
        f"/api/wishlist/settings/{my_settings['id']}/notification/{catalog['id']}",
        json={"enabled": False},
        headers=user_headers,
    )

    assert client.delete(f"/api/wishlist/settings/{my_settings['id']}", headers=user_headers).status_code == 403
    response = client.delete(f"/api/wishlist/settings/{my_settings['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/api/wishlist/settings/{my_settings['id']}", headers=admin_headers).status_code == 404
