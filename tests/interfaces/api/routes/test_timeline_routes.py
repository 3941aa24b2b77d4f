"""Integration tests for timeline, comment and ingest endpoints."""

import pytest
from starlette.websockets import WebSocketDisconnect


def _create_user(client, name):
    response = client.post("/users/", json={"name": name, "email": f"{name.lower()}@example.com"})
    assert response.status_code == 201, response.text
    return response.json()


def _headers(user):
    return {"X-User-Id": str(user["id"])}


@pytest.fixture
def setup(client):
    ana = _create_user(client, "Ana")
    bruno = _create_user(client, "Bruno")
    response = client.post("/clients/", json={"name": "ACME"})
    assert response.status_code == 201
    return {"ana": ana, "bruno": bruno, "client": response.json()}


def _post_event(client, client_id, **payload):
    return client.post(f"/clients/{client_id}/events", json=payload)


def test_timeline_merges_comments_and_collaborator_events(client, setup):
    client_id = setup["client"]["id"]
    assert _post_event(
        client, client_id, id="m1", kind="message", title="Hola", timestamp="2024-05-10T10:00:00Z",
        metadata={"direction": "client_to_team"},
    ).status_code == 201
    assert _post_event(
        client, client_id, id="s1", kind="session", title="Reunión", timestamp="2024-05-10T11:00:00Z"
    ).status_code == 201
    comment = client.post(
        f"/clients/{client_id}/comments/", json={"content": "seguimiento"}, headers=_headers(setup["ana"])
    ).json()["comment"]

    response = client.get(f"/clients/{client_id}/timeline")

    assert response.status_code == 200
    body = response.json()
    assert [event["id"] for event in body["events"]] == [comment["id"], "s1", "m1"]
    assert body["total"] == 3
    assert body["has_older"] is False
    assert body["events"][2]["presentation"]["label"] == "Cliente"


def test_timeline_filters_keep_system_entries(client, setup):
    client_id = setup["client"]["id"]
    _post_event(client, client_id, id="m1", kind="message", title="a", timestamp="2024-05-10T10:00:00Z")
    _post_event(client, client_id, id="r1", kind="risk", title="b", timestamp="2024-05-10T10:01:00Z")
    _post_event(client, client_id, id="f1", kind="field_change", title="c", timestamp="2024-05-10T10:02:00Z")

    response = client.get(f"/clients/{client_id}/timeline", params={"kind": ["risk"]})

    body = response.json()
    assert [event["id"] for event in body["events"]] == ["f1", "r1"]
    assert body["filters"] == ["risk"]


def test_timeline_window_and_expansion(client, setup):
    client_id = setup["client"]["id"]
    for minute in range(12):
        _post_event(
            client, client_id, kind="message", title=f"m{minute}",
            timestamp=f"2024-05-10T10:{minute:02d}:00Z",
        )

    collapsed = client.get(f"/clients/{client_id}/timeline").json()
    expanded = client.get(f"/clients/{client_id}/timeline", params={"expanded": True}).json()

    assert len(collapsed["events"]) == 10
    assert collapsed["has_older"] is True
    assert collapsed["events"][0]["title"] == "m11"
    assert len(expanded["events"]) == 12


def test_conversation_groups_by_day(client, setup):
    client_id = setup["client"]["id"]
    _post_event(client, client_id, id="a", kind="message", title="a", timestamp="2024-05-09T09:00:00Z")
    _post_event(client, client_id, id="b", kind="message", title="b", timestamp="2024-05-10T09:00:00Z")
    _post_event(client, client_id, id="c", kind="message", title="c", timestamp="2024-05-10T08:00:00Z")

    days = client.get(f"/clients/{client_id}/timeline/conversation").json()["days"]

    assert [day["day"] for day in days] == ["2024-05-10", "2024-05-09"]
    assert [event["id"] for event in days[0]["events"]] == ["c", "b"]


def test_malformed_and_duplicate_events_are_rejected(client, setup):
    client_id = setup["client"]["id"]

    bad = _post_event(client, client_id, id="x", kind="message", title="x", timestamp="ayer")
    first = _post_event(client, client_id, id="dup", kind="roi", title="r", timestamp=1715342400)
    again = _post_event(client, client_id, id="dup", kind="roi", title="r", timestamp=1715342400)
    unknown = _post_event(client, client_id, kind="satellite_ping", title="?", timestamp=1715342400)
    other_client_id = client.post("/clients/", json={"name": "Globex"}).json()["id"]
    elsewhere = _post_event(client, other_client_id, id="dup", kind="roi", title="r", timestamp=1715342400)

    assert bad.status_code == 422
    assert first.status_code == 201
    assert again.status_code == 409
    assert elsewhere.status_code == 201
    assert unknown.status_code == 201
    assert unknown.json()["presentation"]["icon"] == "message-square"


def test_comment_mention_reports_recipients(client, setup):
    client_id = setup["client"]["id"]

    response = client.post(
        f"/clients/{client_id}/comments/",
        json={"content": "hey @Ana"},
        headers=_headers(setup["bruno"]),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["notified_user_ids"] == [setup["ana"]["id"]]
    assert body["event"]["kind"] == "comment"

    notifications = client.get("/notifications/", headers=_headers(setup["ana"])).json()
    assert len(notifications) == 1
    assert notifications[0]["link"] == f"/clients/{client_id}#comment-{body['comment']['id']}"


def test_comment_requires_acting_user_and_known_client(client, setup):
    client_id = setup["client"]["id"]

    anonymous = client.post(f"/clients/{client_id}/comments/", json={"content": "hola"})
    missing_client = client.post(
        "/clients/999/comments/", json={"content": "hola"}, headers=_headers(setup["ana"])
    )
    blank = client.post(
        f"/clients/{client_id}/comments/", json={"content": "   "}, headers=_headers(setup["ana"])
    )

    assert anonymous.status_code == 401
    assert missing_client.status_code == 404
    assert blank.status_code == 422


def test_edit_and_delete_comment(client, setup):
    client_id = setup["client"]["id"]
    comment = client.post(
        f"/clients/{client_id}/comments/", json={"content": "borrador"}, headers=_headers(setup["ana"])
    ).json()["comment"]
    url = f"/clients/{client_id}/comments/{comment['id']}"

    forbidden = client.put(url, json={"content": "ajeno"}, headers=_headers(setup["bruno"]))
    updated = client.put(url, json={"content": "final"}, headers=_headers(setup["ana"]))
    deleted = client.delete(url, headers=_headers(setup["ana"]))
    missing = client.delete(url, headers=_headers(setup["ana"]))

    assert forbidden.status_code == 403
    assert updated.status_code == 200
    assert updated.json()["content"] == "final"
    assert deleted.status_code == 204
    assert missing.status_code == 404
    assert client.get(f"/clients/{client_id}/timeline").json()["events"] == []


def test_timeline_of_unknown_client_is_404(client):
    assert client.get("/clients/999/timeline").status_code == 404


def test_timeline_websocket_streams_pushed_comments(client, setup):
    client_id = setup["client"]["id"]
    url = f"/clients/{client_id}/timeline/ws?user_id={setup['ana']['id']}"

    with client.websocket_connect(url) as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert init["data"]["events"] == []

        created = client.post(
            f"/clients/{client_id}/comments/",
            json={"content": "posible riesgo detectado", "origin": "ai_detection"},
            headers=_headers(setup["bruno"]),
        ).json()["comment"]

        messages = [websocket.receive_json(), websocket.receive_json()]
        by_type = {message["type"]: message for message in messages}
        assert by_type["advisory"]["data"]["event_id"] == created["id"]
        assert [event["id"] for event in by_type["feed"]["data"]["events"]] == [created["id"]]

        websocket.send_json({"type": "navigate", "anchor": f"/clients/{client_id}#comment-{created['id']}"})
        highlight = websocket.receive_json()
        scroll = websocket.receive_json()
        assert highlight == {"type": "highlight", "data": {"event_id": created["id"], "phase": "glow"}}
        assert scroll == {"type": "scroll", "data": {"event_id": created["id"]}}

        websocket.send_json({"type": "toggle_filter", "kind": "risk"})
        assert websocket.receive_json() == {"type": "filters", "data": ["risk"]}
        assert websocket.receive_json()["type"] == "feed"

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_timeline_websocket_rejects_unknown_viewer(client, setup):
    client_id = setup["client"]["id"]

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/clients/{client_id}/timeline/ws?user_id=999") as websocket:
            websocket.receive_json()
