from datetime import datetime, timedelta

import pytest

from talenthub.core.errors import NotFoundError
from talenthub.models import Notification
from talenthub.services.notification_service import notification_service


def _notification(db, user, title, read=False, created_at=None, read_at=None):
    notification = Notification(
        userId=user.id,
        title=title,
        message=f"{title} message",
        read=read,
        readAt=read_at,
        createdAt=created_at or datetime.utcnow(),
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def test_list_puts_unread_first_then_newest(db, make_user) -> None:
    user = make_user()
    _notification(db, user, "old unread", created_at=datetime(2024, 1, 1))
    _notification(db, user, "new read", read=True, created_at=datetime(2024, 3, 1), read_at=datetime(2024, 3, 1))
    _notification(db, user, "new unread", created_at=datetime(2024, 2, 1))

    notifications, unread = notification_service.list_for_user(db, user.id)

    assert [n.title for n in notifications] == ["new unread", "old unread", "new read"]
    assert unread == 2


def test_list_is_scoped_to_user(db, make_user) -> None:
    owner = make_user()
    other = make_user()
    _notification(db, other, "not yours")

    notifications, unread = notification_service.list_for_user(db, owner.id)
    assert notifications == []
    assert unread == 0


def test_mark_as_read_only_once(db, make_user) -> None:
    user = make_user()
    notification = _notification(db, user, "hello")

    marked = notification_service.mark_as_read(db, user.id, notification.id)
    assert marked.read is True
    assert marked.readAt is not None

    with pytest.raises(NotFoundError):
        notification_service.mark_as_read(db, user.id, notification.id)


def test_mark_as_read_rejects_other_users(db, make_user) -> None:
    owner = make_user()
    intruder = make_user()
    notification = _notification(db, owner, "private")

    with pytest.raises(NotFoundError):
        notification_service.mark_as_read(db, intruder.id, notification.id)


def test_cleanup_removes_only_expired_read_notifications(db, make_user) -> None:
    user = make_user()
    now = datetime(2024, 5, 1, 12, 0)
    _notification(db, user, "expired", read=True, read_at=now - timedelta(hours=2))
    _notification(db, user, "recent", read=True, read_at=now - timedelta(minutes=10))
    _notification(db, user, "unread", created_at=now - timedelta(days=3))

    assert notification_service.count_old_notifications(db, now=now) == 1
    assert notification_service.cleanup_old_notifications(db, now=now) == 1

    remaining = {n.title for n in db.query(Notification).all()}
    assert remaining == {"recent", "unread"}


def test_publish_notifies_candidates_but_not_owner(db, make_user, make_vacancy) -> None:
    recruiter = make_user("recrutador")
    other_recruiter = make_user("recrutador")
    student = make_user("aluno")
    manager = make_user("gestor")
    vacancy = make_vacancy(recruiter)

    notified = notification_service.notify_vacancy_published(db, vacancy)
    db.commit()

    assert notified == 2
    recipients = {n.userId for n in db.query(Notification).all()}
    assert recipients == {student.id, manager.id}
    assert other_recruiter.id not in recipients


def test_notifications_api(client, db, make_user, auth_headers) -> None:
    user = make_user()
    notification = _notification(db, user, "ping")

    assert client.get("/api/v1/notifications").status_code == 401

    listing = client.get("/api/v1/notifications", headers=auth_headers(user)).json()
    assert listing["unreadCount"] == 1
    assert listing["notifications"][0]["id"] == notification.id

    marked = client.put(
        "/api/v1/notifications", json={"notificationId": notification.id}, headers=auth_headers(user)
    )
    assert marked.status_code == 200
    assert marked.json()["notification"]["read"] is True

    again = client.put(
        "/api/v1/notifications", json={"notificationId": notification.id}, headers=auth_headers(user)
    )
    assert again.status_code == 404

    assert client.post("/api/v1/notifications/cleanup", headers=auth_headers(user)).status_code == 403


def test_cleanup_script_dry_run_keeps_rows(db, make_user) -> None:
    import cleanup_notifications

    user = make_user()
    _notification(db, user, "expired", read=True, read_at=datetime.utcnow() - timedelta(days=1))

    assert cleanup_notifications.main(["--dry-run"]) == 1
    assert db.query(Notification).count() == 1

    assert cleanup_notifications.main([]) == 1
    db.expire_all()
    assert db.query(Notification).count() == 0


CLEANUP_HEADERS = {"Authorization": "Bearer test-cleanup-token"}


def test_cleanup_endpoints_require_the_cleanup_token(client, db, make_user, auth_headers) -> None:
    student = make_user("aluno")
    recruiter = make_user("recrutador")
    _notification(db, recruiter, "expired", read=True, read_at=datetime.utcnow() - timedelta(days=1))

    assert client.post("/api/v1/notifications/cleanup").status_code == 401
    assert client.post("/api/v1/notifications/cleanup", headers=auth_headers(student)).status_code == 403
    assert client.get("/api/v1/notifications/cleanup", headers=auth_headers(student)).status_code == 403
    assert db.query(Notification).count() == 1

    counted = client.get("/api/v1/notifications/cleanup", headers=CLEANUP_HEADERS)
    assert counted.status_code == 200
    assert counted.json() == {"count": 1}

    purged = client.post("/api/v1/notifications/cleanup", headers=CLEANUP_HEADERS)
    assert purged.status_code == 200
    assert purged.json() == {"deletedCount": 1}
    db.expire_all()
    assert db.query(Notification).count() == 0
