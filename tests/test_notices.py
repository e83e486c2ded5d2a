import pytest

from conftest import auth_headers
from app.api.v1.endpoints.push_notifications import push_router
from app.core.exceptions import UpstreamFailure
from app.models.notice_models import Notice
from app.services import push_notification_service


NOTICE = {"title": "Mid-term schedule", "content": "Exams start on Monday", "category": "EXAMS"}


@pytest.fixture
def push_calls(monkeypatch):
    calls = []

    def fake_send_push(heading, content):
        calls.append((heading, content))
        return {"id": "n-1", "recipients": 3}

    monkeypatch.setattr(push_notification_service, "send_push", fake_send_push)
    return calls


def _publish(client, user, body=None):
    response = client.post("/notices", json=body or NOTICE, headers=auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


def test_admin_publishes_notice_and_push_is_sent(client, admin, push_calls):
    data = _publish(client, admin)

    assert data["author_id"] == admin.id
    assert data["category"] == "EXAMS"
    assert data["author"]["email"] == admin.email
    assert push_calls == [("Department Update", "New Notice: Mid-term schedule")]


def test_notice_is_created_even_when_push_fails(client, db_session, admin, monkeypatch):
    def failing_send_push(heading, content):
        raise UpstreamFailure("provider down")

    monkeypatch.setattr(push_notification_service, "send_push", failing_send_push)

    data = _publish(client, admin)

    assert db_session.get(Notice, data["id"]) is not None


def test_send_notice_push_swallows_errors(monkeypatch):
    def boom(heading, content):
        raise RuntimeError("network unreachable")

    monkeypatch.setattr(push_notification_service, "send_push", boom)

    assert push_notification_service.send_notice_push("n1", "Title") is False


def test_unconfigured_push_provider_raises_upstream_failure():
    with pytest.raises(UpstreamFailure):
        push_notification_service.send_push("heading", "content")


@pytest.mark.parametrize("fixture_name", ["student", "teacher"])
def test_non_admins_cannot_publish(client, request, fixture_name, push_calls):
    user = request.getfixturevalue(fixture_name)
    response = client.post("/notices", json=NOTICE, headers=auth_headers(user))
    assert response.status_code == 403
    assert push_calls == []


def test_all_roles_read_notice_feed(client, admin, student, push_calls):
    _publish(client, admin)
    _publish(client, admin, {"title": "Fest", "content": "Cultural night", "category": "EVENTS"})

    response = client.get("/notices", headers=auth_headers(student))

    assert response.status_code == 200
    assert {n["title"] for n in response.json()} == {"Mid-term schedule", "Fest"}


def test_notice_feed_filters_by_category(client, admin, student, push_calls):
    _publish(client, admin)
    _publish(client, admin, {"title": "Fest", "content": "Cultural night", "category": "EVENTS"})

    response = client.get("/notices", params={"category": "EVENTS"}, headers=auth_headers(student))

    assert [n["title"] for n in response.json()] == ["Fest"]


def test_get_notice_by_id(client, admin, student, push_calls):
    data = _publish(client, admin)

    response = client.get(f"/notices/{data['id']}", headers=auth_headers(student))
    assert response.status_code == 200
    assert response.json()["title"] == NOTICE["title"]

    missing = client.get("/notices/nope", headers=auth_headers(student))
    assert missing.status_code == 404


def test_admin_edits_own_notice(client, admin, push_calls):
    data = _publish(client, admin)

    response = client.put(
        f"/notices/{data['id']}",
        json={"title": "Mid-term schedule (revised)"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Mid-term schedule (revised)"
    assert response.json()["content"] == NOTICE["content"]


def test_admin_cannot_edit_or_delete_others_notice(client, admin, other_admin, push_calls):
    data = _publish(client, admin)

    edit = client.put(f"/notices/{data['id']}", json={"title": "x"}, headers=auth_headers(other_admin))
    delete = client.delete(f"/notices/{data['id']}", headers=auth_headers(other_admin))

    assert edit.status_code == 403
    assert edit.json() == {"error": "You can only edit your own notices"}
    assert delete.status_code == 403


def test_super_admin_edits_and_deletes_any_notice(client, db_session, admin, super_admin, push_calls):
    data = _publish(client, admin)

    edit = client.put(
        f"/notices/{data['id']}",
        json={"category": "GENERAL"},
        headers=auth_headers(super_admin),
    )
    assert edit.status_code == 200
    assert edit.json()["category"] == "GENERAL"

    delete = client.delete(f"/notices/{data['id']}", headers=auth_headers(super_admin))
    assert delete.status_code == 200
    assert db_session.get(Notice, data["id"]) is None


def test_invalid_category_is_rejected(client, admin, push_calls):
    response = client.post(
        "/notices",
        json={**NOTICE, "category": "SPORTS"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 400


def test_push_test_endpoint(client, admin, student, monkeypatch):
    monkeypatch.setattr(push_router, "send_push", lambda heading, content: {"id": "n-9", "recipients": 12})

    forbidden = client.post("/push/test", headers=auth_headers(student))
    assert forbidden.status_code == 403

    response = client.post("/push/test", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["recipients"] == 12


def test_push_test_reports_provider_failure(client, admin):
    # no OneSignal credentials in the test environment
    response = client.post("/push/test", headers=auth_headers(admin))

    assert response.status_code == 502
    assert response.json() == {"error": "Push notifications are not configured"}


def test_blank_title_or_content_is_rejected_on_create(client, db_session, admin, push_calls):
    response = client.post(
        "/notices",
        json={"title": "   ", "content": "  ", "category": "GENERAL"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Title is required"}
    assert db_session.query(Notice).count() == 0
    assert push_calls == []


def test_blank_title_or_content_is_rejected_on_update(client, admin, push_calls):
    data = _publish(client, admin)

    title = client.put(f"/notices/{data['id']}", json={"title": "  "}, headers=auth_headers(admin))
    content = client.put(f"/notices/{data['id']}", json={"content": "\t"}, headers=auth_headers(admin))

    assert title.status_code == 400
    assert content.status_code == 400
    assert content.json() == {"error": "Content is required"}

    unchanged = client.get(f"/notices/{data['id']}", headers=auth_headers(admin)).json()
    assert unchanged["title"] == NOTICE["title"]
    assert unchanged["content"] == NOTICE["content"]


def test_feed_returns_every_notice_by_default(client, db_session, admin, student):
    db_session.add_all(
        [Notice(title=f"Notice {i}", content="c", author_id=admin.id) for i in range(75)]
    )
    db_session.commit()

    feed = client.get("/notices", headers=auth_headers(student))
    page = client.get("/notices", params={"skip": 70, "limit": 10}, headers=auth_headers(student))

    assert len(feed.json()) == 75
    assert len(page.json()) == 5
