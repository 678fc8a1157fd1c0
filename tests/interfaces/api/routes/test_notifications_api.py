"""Integration tests for the notification API endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Query


@pytest.fixture()
def client(database):
    """Return a test client bound to a clean application instance."""

    from notification_service.main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_schedule_fanout_and_inbox_flow(client: TestClient, make_user, make_item) -> None:
    """Exercise fan-out, listing, read-state and deletion through HTTP."""

    director = make_user("director")
    gaffer = make_user("gaffer")
    item = make_item(created_by=director.id, assignee_ids=[director.id, gaffer.id])

    response = client.post(
        "/notifications/schedule",
        json={"itemId": item.id, "itemType": "scene", "projectId": 1},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["notificationCount"] == 2
    assert body["data"]["itemTitle"] == "Kitchen Scene"
    assert body["data"]["itemType"] == "scene"
    assert body["data"]["failedRecipients"] == []

    inbox = client.get(f"/notifications/user/{gaffer.id}", params={"projectId": 1})
    assert inbox.status_code == 200
    inbox_body = inbox.json()
    assert inbox_body["pagination"] == {"page": 1, "pages": 1, "total": 1, "limit": 20}
    assert inbox_body["unreadCount"] == 1
    (notification,) = inbox_body["data"]
    assert notification["type"] == "schedule_reminder"
    assert notification["message"] == (
        'You are assigned to scene "Kitchen Scene" on 2025-10-07 at 09:00'
    )
    assert notification["recipientId"] == gaffer.id
    assert notification["sentById"] == director.id
    assert notification["sentBy"] == {"id": director.id, "username": "director"}
    assert notification["payload"]["scheduleInfo"] == "on 2025-10-07 at 09:00"
    assert notification["read"] is False
    assert notification["readAt"] is None
    assert notification["formattedDate"]

    read = client.patch(f"/notifications/{notification['id']}/read")
    assert read.status_code == 200
    assert read.json()["data"]["read"] is True
    assert read.json()["data"]["readAt"] is not None

    count = client.get(f"/notifications/user/{gaffer.id}/unread-count")
    assert count.json() == {"success": True, "unreadCount": 0}

    deleted = client.delete(f"/notifications/{notification['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["success"] is True

    missing = client.delete(f"/notifications/{notification['id']}")
    assert missing.status_code == 404
    assert missing.json()["success"] is False
    assert missing.json()["error"] == "NOT_FOUND"


def test_read_all_scoped_by_project(client: TestClient, make_user, make_notification) -> None:
    owner = make_user()
    make_notification(owner.id, project_id=1)
    make_notification(owner.id, project_id=1)
    make_notification(owner.id, project_id=2)

    response = client.patch(
        f"/notifications/user/{owner.id}/read-all", params={"projectId": 1}
    )
    assert response.status_code == 200
    assert response.json()["modifiedCount"] == 2

    scoped = client.get(
        f"/notifications/user/{owner.id}/unread-count", params={"projectId": 1}
    )
    assert scoped.json()["unreadCount"] == 0
    overall = client.get(f"/notifications/user/{owner.id}/unread-count")
    assert overall.json()["unreadCount"] == 1


def test_list_pagination_edges(client: TestClient, make_user, make_notification) -> None:
    owner = make_user()
    for _ in range(10):
        make_notification(owner.id)

    beyond = client.get(f"/notifications/user/{owner.id}", params={"page": 3, "limit": 20})
    assert beyond.status_code == 200
    assert beyond.json()["data"] == []
    assert beyond.json()["pagination"]["pages"] == 1

    far_away = client.get(f"/notifications/user/{owner.id}", params={"page": 10**19})
    assert far_away.status_code == 200
    assert far_away.json()["data"] == []
    assert far_away.json()["pagination"]["total"] == 10

    invalid = client.get(f"/notifications/user/{owner.id}", params={"page": 0})
    assert invalid.status_code == 400
    assert invalid.json()["success"] is False
    assert invalid.json()["error"] == "VALIDATION_ERROR"


def test_schedule_request_validation(client: TestClient, make_user, make_item) -> None:
    crew = make_user()
    item = make_item(assignee_ids=[crew.id])

    missing = client.post("/notifications/schedule", json={"itemType": "scene"})
    assert missing.status_code == 400
    assert missing.json()["success"] is False

    wrong_type = client.post(
        "/notifications/schedule",
        json={"itemId": item.id, "itemType": "shot", "projectId": 1},
    )
    assert wrong_type.status_code == 400
    assert "itemType" in wrong_type.json()["message"]

    unknown = client.post(
        "/notifications/schedule",
        json={"itemId": 999, "itemType": "scene", "projectId": 1},
    )
    assert unknown.status_code == 404


def test_event_partial_failure_reports_breakdown(client: TestClient, make_user) -> None:
    sender = make_user()
    crew = make_user()

    response = client.post(
        "/notifications/events",
        json={
            "type": "chat_message",
            "title": "New message",
            "message": "Wrap party at 8",
            "recipientIds": [crew.id, 4242],
            "sentById": sender.id,
            "projectId": 1,
        },
    )

    assert response.status_code == 207
    body = response.json()
    assert body["data"]["notificationCount"] == 1
    assert body["data"]["failedRecipients"][0]["recipientId"] == 4242


def test_actor_header_must_match_owner(client: TestClient, make_user, make_notification) -> None:
    owner = make_user()
    intruder = make_user()
    notification = make_notification(owner.id)

    forbidden = client.patch(
        f"/notifications/{notification.id}/read",
        headers={"X-User-Id": str(intruder.id)},
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "FORBIDDEN"

    listing = client.get(
        f"/notifications/user/{owner.id}", headers={"X-User-Id": str(intruder.id)}
    )
    assert listing.status_code == 403

    allowed = client.get(
        f"/notifications/user/{owner.id}", headers={"X-User-Id": str(owner.id)}
    )
    assert allowed.status_code == 200


def test_unknown_user_inbox_is_not_found(client: TestClient) -> None:
    response = client.get("/notifications/user/31337")

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.parametrize(
    ("method", "path", "params"),
    [
        ("get", f"/notifications/user/{10**19}", {}),
        ("get", "/notifications/user/1", {"projectId": 10**19}),
        ("patch", f"/notifications/{10**19}/read", {}),
        ("delete", "/notifications/0", {}),
    ],
)
def test_out_of_range_identifiers_are_rejected(
    client: TestClient, make_user, method, path, params
) -> None:
    make_user()

    response = client.request(method, path, params=params)

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_store_outage_is_reported_without_driver_details(
    client: TestClient, make_user, monkeypatch
) -> None:
    owner = make_user()

    def unavailable(self, *args, **kwargs):
        raise OperationalError(
            "SELECT count(*)", {}, Exception("disk I/O error on /srv/secret.db")
        )

    monkeypatch.setattr(Query, "count", unavailable)

    response = client.get(f"/notifications/user/{owner.id}/unread-count")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "STORE_UNAVAILABLE"
    assert body["message"] == "Store unavailable while trying to count notifications"
    assert "secret" not in response.text


def test_event_sender_must_match_actor_header(client: TestClient, make_user) -> None:
    sender = make_user()
    impostor = make_user()
    crew = make_user()
    request = {
        "type": "task_update",
        "title": "Task Update",
        "message": "Dolly track delivered",
        "recipientIds": [crew.id],
        "sentById": sender.id,
    }

    forbidden = client.post(
        "/notifications/events", json=request, headers={"X-User-Id": str(impostor.id)}
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "FORBIDDEN"

    allowed = client.post(
        "/notifications/events", json=request, headers={"X-User-Id": str(sender.id)}
    )
    assert allowed.status_code == 200
    assert allowed.json()["data"]["notificationCount"] == 1


def test_unknown_route_keeps_the_error_shape(client: TestClient) -> None:
    response = client.get("/notifications/nowhere/at/all")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found", "error": "HTTP_ERROR"}
