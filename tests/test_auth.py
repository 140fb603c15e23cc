from agrimandi.core.config import settings
from agrimandi.models.user import User

from conftest import PASSWORD


def register(client, email="ravi@agrimandi.in", password=PASSWORD, name="Ravi", role="farmer"):
    return client.post("/auth/register", json={
        "email": email, "password": password, "name": name, "role": role,
    })


def test_register_stores_only_a_hash(client, db):
    resp = register(client)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["role"] == "farmer"

    user = db.query(User).filter(User.email == "ravi@agrimandi.in").one()
    assert user.hashed_password != PASSWORD
    assert user.hashed_password.startswith("$2")


def test_register_duplicate_email_conflicts(client):
    assert register(client).status_code == 201
    resp = register(client, name="Someone Else", role="buyer")
    assert resp.status_code == 409
    assert resp.json() == {"message": "User with this email already exists"}


def test_register_rejects_unknown_role(client):
    resp = register(client, role="trader")
    assert resp.status_code == 400
    assert "message" in resp.json()


def test_register_rejects_missing_fields(client):
    resp = client.post("/auth/register", json={"email": "x@agrimandi.in", "password": "p"})
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Missing required field")


def test_register_rejects_blank_name(client):
    resp = register(client, name="   ")
    assert resp.status_code == 400


def test_login_sets_session_and_status_reports_it(client):
    register(client)
    resp = client.post("/auth/login", json={"email": "ravi@agrimandi.in", "password": PASSWORD})
    assert resp.status_code == 200
    assert settings.SESSION_COOKIE_NAME in resp.cookies
    user = resp.json()["user"]
    assert user["name"] == "Ravi"
    assert user["email"] == "ravi@agrimandi.in"

    status = client.get("/auth/status").json()
    assert status["loggedIn"] is True
    assert status["user"]["id"] == user["id"]


def test_login_failures_are_indistinguishable(client):
    register(client)
    wrong_password = client.post("/auth/login", json={"email": "ravi@agrimandi.in", "password": "nope"})
    unknown_email = client.post("/auth/login", json={"email": "ghost@agrimandi.in", "password": "nope"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid credentials"}


def test_logout_is_idempotent(client):
    register(client)
    client.post("/auth/login", json={"email": "ravi@agrimandi.in", "password": PASSWORD})

    assert client.post("/auth/logout").status_code == 200
    assert client.post("/auth/logout").status_code == 200
    assert client.get("/auth/status").json() == {"loggedIn": False, "user": None}


def test_status_without_session(client):
    assert client.get("/auth/status").json() == {"loggedIn": False, "user": None}


def test_tampered_cookie_is_treated_as_no_session(client):
    client.cookies.set(settings.SESSION_COOKIE_NAME, "not-a-signed-token")
    assert client.get("/auth/status").json()["loggedIn"] is False
    assert client.get("/my-posts").status_code == 401


def test_sessions_do_not_interfere(login_as):
    farmer = login_as("farmer", name="Asha")
    buyer = login_as("buyer", name="Bilal")

    farmer.post("/auth/logout")

    assert farmer.get("/auth/status").json()["loggedIn"] is False
    assert buyer.get("/auth/status").json()["user"]["name"] == "Bilal"


def test_register_rejects_password_past_bcrypt_limit(client):
    resp = register(client, password="a" * 73)
    assert resp.status_code == 400
    # multi-byte characters count by their encoded size
    assert register(client, password="é" * 37).status_code == 400
    assert register(client, password="a" * 72).status_code == 201


def test_passwords_sharing_a_long_prefix_stay_distinct(client):
    register(client, password="x" * 72)
    resp = client.post("/auth/login", json={"email": "ravi@agrimandi.in", "password": "x" * 71 + "y"})
    assert resp.status_code == 401


def test_user_rows_carry_no_update_timestamp():
    assert "updated_at" not in User.__table__.columns


def test_login_with_password_past_bcrypt_limit_fails(client):
    register(client, password="x" * 72)
    resp = client.post("/auth/login", json={"email": "ravi@agrimandi.in", "password": "x" * 72 + "z"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}
