"""
Auth and user API tests
"""
from datetime import timedelta

from jose import jwt

from app.application.services.auth_service import (
    get_user_by_email,
    issue_token,
    resolve_user,
    validate_token,
)
from app.config import get_settings


def test_health_check(client):
    response = client.get("/api/public/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_register_returns_token_and_user(client, register):
    token, user = register("ana@college.edu", department="Physics", name="Ana")

    assert user["email"] == "ana@college.edu"
    assert user["role"] == "STUDENT"
    assert user["department"] == "Physics"
    assert user["active"] is True

    settings = get_settings()
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert claims["sub"] == "ana@college.edu"
    assert claims["userId"] == user["id"]
    assert claims["name"] == "Ana"
    assert claims["role"] == "STUDENT"
    assert claims["authorities"] == "ROLE_STUDENT"
    assert claims["exp"] > claims["iat"]


def test_register_duplicate_email(client, register):
    register("dup@college.edu")
    response = client.post(
        "/api/auth/register",
        json={"email": "dup@college.edu", "password": "x", "name": "Dup", "role": "STUDENT"},
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DuplicateEmailException"


def test_login(client, register):
    register("bo@college.edu", role="EVENT_MANAGER", password="pw-123", designation="Lead")

    response = client.post("/api/auth/login", json={"email": "bo@college.edu", "password": "pw-123"})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "EVENT_MANAGER"
    assert response.json()["token"]

    wrong_password = client.post("/api/auth/login", json={"email": "bo@college.edu", "password": "nope"})
    assert wrong_password.status_code == 400

    unknown = client.post("/api/auth/login", json={"email": "ghost@college.edu", "password": "pw-123"})
    assert unknown.status_code == 400

    wrong_role = client.post(
        "/api/auth/login", json={"email": "bo@college.edu", "password": "pw-123", "role": "STUDENT"}
    )
    assert wrong_role.status_code == 400
    assert wrong_role.json()["error"]["message"] == "Invalid role for this user"


def test_deactivated_account_cannot_login(client, register, bearer):
    admin_token, _ = register("admin@college.edu", role="ADMIN")
    student_token, student = register("cy@college.edu", password="pw-123")

    response = client.put(f"/api/users/{student['id']}", json={"active": False}, headers=bearer(admin_token))
    assert response.status_code == 200
    assert response.json()["active"] is False
    assert response.json()["email"] == "cy@college.edu"

    response = client.post("/api/auth/login", json={"email": "cy@college.edu", "password": "pw-123"})
    assert response.status_code == 403
    assert client.get("/api/auth/profile", headers=bearer(student_token)).status_code == 401


def test_protected_endpoints_require_token(client):
    assert client.get("/api/auth/profile").status_code == 401
    assert client.get("/api/events").status_code == 401
    response = client.get("/api/events", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_profile_and_password_flow(client, register, bearer):
    token, _ = register("di@college.edu", password="old-pw", department="Math")

    response = client.put("/api/auth/profile", json={"name": "Di", "department": "Statistics"}, headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["name"] == "Di"
    assert response.json()["department"] == "Statistics"

    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "wrong", "newPassword": "new-pw"},
        headers=bearer(token),
    )
    assert response.status_code == 400

    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "old-pw", "newPassword": "new-pw"},
        headers=bearer(token),
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Password changed successfully"}

    response = client.post("/api/auth/login", json={"email": "di@college.edu", "password": "new-pw"})
    assert response.status_code == 200


def test_role_specific_details(client, register, bearer):
    student_token, _ = register("ed@college.edu")
    manager_token, _ = register("fi@college.edu", role="EVENT_MANAGER", designation="Lead", phoneNumber="42")

    assert client.get("/api/auth/student-details", headers=bearer(student_token)).status_code == 404
    response = client.put(
        "/api/auth/student-details",
        json={"rollNumber": "R-1", "department": "Biology", "collegeName": "North Campus"},
        headers=bearer(student_token),
    )
    assert response.status_code == 200
    assert response.json()["rollNumber"] == "R-1"
    assert response.json()["collegeName"] == "North Campus"

    response = client.get("/api/auth/event-manager-details", headers=bearer(manager_token))
    assert response.status_code == 200
    assert response.json()["designation"] == "Lead"
    assert response.json()["phoneNumber"] == "42"

    assert client.get("/api/auth/student-details", headers=bearer(manager_token)).status_code == 403
    assert client.get("/api/auth/event-manager-details", headers=bearer(student_token)).status_code == 403


def test_admin_only_user_management(client, register, bearer):
    student_token, student = register("gu@college.edu")
    admin_token, _ = register("boss@college.edu", role="ADMIN")

    assert client.get("/api/users", headers=bearer(student_token)).status_code == 403
    assert client.get("/api/users/profile", headers=bearer(student_token)).json()["email"] == "gu@college.edu"

    response = client.get("/api/users", headers=bearer(admin_token))
    assert response.status_code == 200
    assert {u["email"] for u in response.json()} == {"gu@college.edu", "boss@college.edu"}

    stats = client.get("/api/users/stats", headers=bearer(admin_token)).json()
    assert stats["total"] == 2
    assert stats["by_role"]["ADMIN"] == 1

    response = client.delete(f"/api/users/{student['id']}", headers=bearer(admin_token))
    assert response.status_code == 200
    assert client.get(f"/api/users/{student['id']}", headers=bearer(admin_token)).status_code == 404


def test_token_validation_and_resolution(client, register, db):
    token, user = register("tok@college.edu")
    account = get_user_by_email(db, "tok@college.edu")
    settings = get_settings()

    expired = issue_token(account, expires_delta=timedelta(seconds=-5))
    forged = jwt.encode(jwt.get_unverified_claims(token), "another-secret", algorithm=settings.JWT_ALGORITHM)

    assert validate_token(token) is True
    assert validate_token(expired) is False
    assert validate_token(forged) is False
    assert validate_token("garbage") is False

    assert resolve_user(db, token).id == user["id"]
    assert resolve_user(db, expired) is None
    assert resolve_user(db, forged) is None


def test_expired_token_is_rejected(client, register, db, bearer):
    register("late@college.edu")
    expired = issue_token(get_user_by_email(db, "late@college.edu"), expires_delta=timedelta(seconds=-5))

    response = client.get("/api/auth/profile", headers=bearer(expired))
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UnauthorizedException"
