from tests.helpers.auth import auth_header, login
from tests.helpers.factories import list_users
from tests.helpers.payloads import signup_payload


def test_auth_registers_user_when_all_fields_are_present(client, db_session):
    """
    Validate registration through the combined auth endpoint.

    1. Post username, password and email to /auth.
    2. Receive successful response.
    3. Validate the message and returned user data.
    4. Validate the user was stored.
    """
    response = client.post("/auth", json=signup_payload())
    assert response.status_code == 200
    payload = response.json()
    assert "message" in payload
    assert payload["data"]["username"] == "kash"
    assert "password" not in payload["data"]
    assert [user.email for user in list_users(db_session)] == ["kash@gmail.com"]


def test_auth_requires_all_fields_for_registration(client):
    """
    Validate registration missing-field branch.

    1. Post username and password without email to /auth.
    2. Receive bad request response.
    3. Validate the message is present.
    """
    response = client.post("/auth", json=signup_payload(email=None))
    assert response.status_code == 400
    assert response.json()["message"] == "All fields are required"


def test_auth_rejects_wrong_credentials(client, seeded_users):
    """
    Validate login failure branch.

    1. Post an unknown email and password to /auth.
    2. Receive forbidden response.
    3. Post a known email with a wrong password.
    4. Validate both responses carry a message.
    """
    unknown = client.post("/auth", json={"email": "lord@gmail.com", "password": "23588"})
    assert unknown.status_code == 403
    assert "message" in unknown.json()

    wrong_password = client.post("/auth", json={"email": "kash@gmail.com", "password": "nope"})
    assert wrong_password.status_code == 403


def test_auth_login_returns_usable_bearer_token(client, seeded_users, seeded_schools):
    """
    Validate login success and token use.

    1. Log in with seeded credentials.
    2. Validate a bearer token is returned.
    3. Call a protected school endpoint with the token.
    4. Validate access is granted.
    """
    response = client.post("/auth", json={"email": "kash@gmail.com", "password": "1234kash"})
    assert response.status_code == 200
    assert response.json()["data"]["token_type"] == "bearer"

    token = login(client, "kash@gmail.com", "1234kash")
    school_id = seeded_schools["holystar"].id
    protected = client.get(f"/schools/{school_id}", headers=auth_header(token))
    assert protected.status_code == 200


def test_auth_login_requires_email_and_password(client):
    """
    Validate login missing-field branch.

    1. Post only a password to /auth.
    2. Receive bad request response.
    3. Validate the message is present.
    """
    response = client.post("/auth", json={"password": "1234kash"})
    assert response.status_code == 400
    assert "message" in response.json()


def test_signup_registers_and_validates(client, seeded_users):
    """
    Validate the dedicated signup endpoint.

    1. Sign up a new user.
    2. Validate success response.
    3. Sign up with a missing field, an invalid email and a taken username.
    4. Validate 400, 400 and 409 responses with messages.
    """
    created = client.post("/signup", json=signup_payload(username="ama", email="ama@gmail.com"))
    assert created.status_code == 200
    assert created.json()["data"]["email"] == "ama@gmail.com"

    missing = client.post("/signup", json=signup_payload(username=None))
    assert missing.status_code == 400
    assert missing.json()["message"] == "All fields are required"

    invalid_email = client.post("/signup", json=signup_payload(username="kofi", email="not-an-email"))
    assert invalid_email.status_code == 400
    assert invalid_email.json()["message"].startswith("Invalid email")

    taken = client.post("/signup", json=signup_payload())
    assert taken.status_code == 409
    assert taken.json()["message"] == "User already exists"


def test_signup_rejects_injection_in_username(client):
    """
    Validate injection screening on user fields.

    1. Sign up with a SQL payload as username.
    2. Receive bad request response.
    3. Validate the rejection message.
    """
    response = client.post("/signup", json=signup_payload(username="admin'--"))
    assert response.status_code == 400
    assert response.json()["message"] == "SQL injection attempt detected"


def test_legacy_singup_route_still_resolves(client, seeded_users):
    """
    Validate the legacy misspelled signup route.

    1. Post email and password for a missing account.
    2. Receive successful response with a no-user message.
    3. Post credentials of an existing account.
    4. Validate the account is reported with a token.
    """
    missing = client.post("/singup", json={"password": "1234john", "email": "nobody@gmail.com"})
    assert missing.status_code == 200
    assert missing.json()["message"] == "No user found!"

    found = client.post("/singup", json={"password": "1234john", "email": "john@gmail.com"})
    assert found.status_code == 200
    assert found.json()["message"] == "User found"
    assert found.json()["data"]["access_token"]

    registered = client.post("/singup", json=signup_payload(username="yaw", email="yaw@gmail.com"))
    assert registered.status_code == 200
    assert registered.json()["data"]["username"] == "yaw"


def test_signup_racing_a_committed_user_returns_409(client, db_session, seeded_users, monkeypatch):
    """
    Validate a signup that loses a race to an identical signup answers conflict.

    1. Seed the user, as if a concurrent signup committed first.
    2. Make the uniqueness lookup miss, as it would for the racing request.
    3. Post the same signup and receive conflict response.
    4. Validate the message and that no user was added.
    """
    monkeypatch.setattr("app.application.services.user_service.find_conflicting_user", lambda *args, **kwargs: None)

    response = client.post("/signup", json=signup_payload())
    assert response.status_code == 409
    assert response.json()["message"] == "User already exists"
    assert len(list_users(db_session)) == 2
