"""Integration tests for the user directory endpoints."""


def test_register_and_list_users(client):
    response = client.post("/users/", json={"name": "Ana", "email": "Ana@Example.com"})

    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "ana@example.com"

    listed = client.get("/users/").json()
    assert [user["name"] for user in listed] == ["Ana"]

    me = client.get("/users/me", headers={"X-User-Id": str(created["id"])})
    assert me.json()["id"] == created["id"]


def test_duplicate_email_is_rejected(client):
    client.post("/users/", json={"name": "Ana", "email": "ana@example.com"})

    response = client.post("/users/", json={"name": "Ana2", "email": "ANA@example.com"})

    assert response.status_code == 400


def test_names_must_be_mentionable(client):
    response = client.post("/users/", json={"name": "Ana Maria", "email": "am@example.com"})

    assert response.status_code == 400


def test_unknown_user_is_404(client):
    assert client.get("/users/999").status_code == 404
    assert client.get("/users/me", headers={"X-User-Id": "999"}).status_code == 401
