def test_ping_endpoint_reports_connectivity(client):
    """
    Validate the public health endpoint payload.

    1. Call the public ping endpoint without authentication.
    2. Parse the response payload returned by the backend.
    3. Validate the message value is present.
    4. Validate DB and Redis connectivity flags are true.
    """
    response = client.get("/ping")
    assert response.status_code == 200

    payload = response.json()
    assert payload["message"].endswith("is running")
    assert payload["db_connected"] is True
    assert payload["redis_connected"] is True


def test_root_and_unknown_routes_use_message_envelope(client):
    """
    Validate the JSON error envelope for framework-level errors.

    1. Call the service root.
    2. Call an unknown route and a misspelled school route.
    3. Validate not found responses carry a message.
    4. Validate every response carries a request id header.
    """
    root = client.get("/")
    assert root.status_code == 200
    assert "message" in root.json()

    unknown = client.get("/does-not-exist")
    assert unknown.status_code == 404
    assert "message" in unknown.json()

    misspelled = client.post("/shools/registration", json={})
    assert misspelled.status_code == 404
    assert "message" in misspelled.json()

    assert root.headers["x-request-id"]
    assert client.get("/", headers={"X-Request-Id": "abc-123"}).headers["x-request-id"] == "abc-123"
