from fastapi import status


def test_login_teacher(client, seed_data):
    response = client.post(
        "/auth/login",
        json={"email": "teacher@example.com", "password": "teacher123"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["role"] == "teacher"
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "teacher@example.com"


def test_login_wrong_password(client, seed_data):
    response = client.post(
        "/auth/login",
        json={"email": "student@example.com", "password": "nope"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me(client, student_headers):
    response = client.get("/me", headers=student_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "student"
    assert response.json()["profile"]["full_name"] == "Alan Turing"


def test_me_requires_token(client, seed_data):
    response = client.get("/me")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_me_rejects_garbage_token(client, seed_data):
    response = client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
