from datetime import timedelta

from conftest import auth_headers, TEST_PASSWORD
from app.models.user_models import User
from app.services import mail_service
from app.utils.clock import utc_now


def test_login_returns_bearer_token(client, student):
    response = client.post("/auth/login", json={"email": student.email, "password": TEST_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["id"] == student.id

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == student.email


def test_login_with_wrong_password(client, student):
    response = client.post("/auth/login", json={"email": student.email, "password": "not-it"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


def test_missing_and_garbage_tokens_are_unauthenticated(client):
    assert client.get("/auth/me").status_code == 401
    response = client.get("/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401


def test_logout_revokes_existing_tokens(client, admin):
    headers = auth_headers(admin)

    assert client.post("/auth/logout", headers=headers).status_code == 200

    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 401
    assert response.json() == {"error": "Token has been revoked"}


def test_forgot_password_does_not_reveal_unknown_email(client):
    response = client.post("/auth/forgot-password", json={"email": "ghost@example.com"})

    assert response.status_code == 200
    assert response.json()["debug_token"] is None


def test_password_reset_flow(client, db_session, student, monkeypatch):
    sent = []
    monkeypatch.setattr(mail_service, "send_email", lambda to, subject, html: sent.append(html) or True)

    forgot = client.post("/auth/forgot-password", json={"email": student.email})
    assert forgot.status_code == 200
    token = forgot.json()["debug_token"]
    assert token and token in sent[0]

    reset = client.post("/auth/reset-password", json={"token": token, "password": "brand-new-pass"})
    assert reset.status_code == 200

    login = client.post("/auth/login", json={"email": student.email, "password": "brand-new-pass"})
    assert login.status_code == 200

    # tokens are single use
    again = client.post("/auth/reset-password", json={"token": token, "password": "another-pass"})
    assert again.status_code == 400
    assert again.json() == {"error": "Invalid or expired reset token"}


def test_expired_reset_token_is_rejected(client, db_session, student):
    user = db_session.get(User, student.id)
    user.password_reset_token = "a" * 64
    user.password_reset_token_expires_at = utc_now() - timedelta(minutes=1)
    db_session.commit()

    response = client.post("/auth/reset-password", json={"token": "a" * 64, "password": "whatever123"})

    assert response.status_code == 400


def test_change_password(client, teacher):
    headers = auth_headers(teacher)

    mismatch = client.put(
        "/update-password",
        json={
            "current_password": TEST_PASSWORD,
            "new_password": "new-password-1",
            "confirm_new_password": "new-password-2",
        },
        headers=headers,
    )
    assert mismatch.status_code == 400

    wrong = client.put(
        "/update-password",
        json={
            "current_password": "nope-nope",
            "new_password": "new-password-1",
            "confirm_new_password": "new-password-1",
        },
        headers=headers,
    )
    assert wrong.status_code == 401

    ok = client.put(
        "/update-password",
        json={
            "current_password": TEST_PASSWORD,
            "new_password": "new-password-1",
            "confirm_new_password": "new-password-1",
        },
        headers=headers,
    )
    assert ok.status_code == 200

    login = client.post("/auth/login", json={"email": teacher.email, "password": "new-password-1"})
    assert login.status_code == 200
