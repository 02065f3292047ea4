"""
Tests for authentication endpoints.
"""


def test_login(client, admin_user):
    """Test user login."""
    response = client.post(
        "/api/auth/login",
        json={"username": "admin", "password": "secret123"}
    )
    assert response.status_code == 200
    assert "access_token" in response.json()
    assert response.json()["token_type"] == "bearer"


def test_login_invalid_credentials(client, admin_user):
    """Test login with invalid credentials."""
    response = client.post(
        "/api/auth/login",
        json={"username": "admin", "password": "wrongpassword"}
    )
    assert response.status_code == 401

    response = client.post(
        "/api/auth/login",
        json={"username": "nonexistent", "password": "secret123"}
    )
    assert response.status_code == 401


def test_me(client, admin_headers):
    response = client.get("/api/auth/me", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "admin"
    assert response.json()["role"] == "admin"
    assert "hashed_password" not in response.json()


def test_me_rejects_bad_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_admin_creates_client_account(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        json={"username": "bob", "email": "bob@example.com", "password": "pw123456"},
        headers=admin_headers
    )
    assert response.status_code == 201
    assert response.json()["role"] == "client"

    duplicate = client.post(
        "/api/admin/users",
        json={"username": "bob", "email": "other@example.com", "password": "pw123456"},
        headers=admin_headers
    )
    assert duplicate.status_code == 400

    login = client.post("/api/auth/login", json={"username": "bob", "password": "pw123456"})
    assert login.status_code == 200


def test_client_cannot_use_admin_routes(client, client_headers):
    response = client.get("/api/admin/users", headers=client_headers)
    assert response.status_code == 403


def test_admin_routes_require_token(client):
    response = client.get("/api/admin/client-galleries")
    assert response.status_code in (401, 403)
