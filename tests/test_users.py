from models.users import User as UserModel


def register(client, username, password="same-password"):
    res = client.post("/v1/users/", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
        "first_name": username.title(),
        "last_name": "Park",
    })
    assert res.json()["success"] is True
    return res.json()["data"]


def test_password_is_stored_salted(client, db):
    first = register(client, "hana")
    second = register(client, "dul")

    stored_first = db.get(UserModel, first["id"])
    stored_second = db.get(UserModel, second["id"])

    assert stored_first.password != "same-password"
    assert stored_first.password.startswith("pbkdf2:sha256")
    # 같은 비밀번호라도 salt가 달라 해시가 다름
    assert stored_first.password != stored_second.password
    assert stored_first.check_password("same-password")
    assert not stored_first.check_password("wrong-password")


def test_password_is_not_returned(client):
    data = register(client, "set")

    assert "password" not in data


def test_duplicate_username_is_rejected(client):
    register(client, "net")

    body = client.post("/v1/users/", json={
        "username": "net", "email": "other@example.com", "password": "x",
        "first_name": "Net", "last_name": "Park",
    }).json()

    assert body["success"] is False
    assert body["error"]["code"] == 409
