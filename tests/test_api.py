def _create_employee(client, manager_headers, **overrides):
    payload = {"username": "maria", "full_name": "Maria P.", "password": "secret", "monthly_revenue_target": 1000}
    payload.update(overrides)
    res = client.post("/employees", json=payload, headers=manager_headers)
    assert res.status_code == 200, res.text
    return res.json()


def _create_definition(client, manager_headers, name="Upsell", points=10, event_type="positive"):
    res = client.post(
        "/admin/events-settings",
        json={"name": name, "points": points, "event_type": event_type},
        headers=manager_headers,
    )
    assert res.status_code == 200, res.text
    return res.json()


def test_root(client):
    assert client.get("/").json() == {"message": "Incentive Engine is running"}


def test_manager_routes_need_the_key(client):
    assert client.get("/employees").status_code == 403
    assert client.get("/employees", headers={"X-Manager-Key": "wrong"}).status_code == 403
    assert client.post("/events", json={"employee_id": "00000000-0000-0000-0000-000000000000"}).status_code == 403


def test_is_manager(client, manager_headers):
    assert client.get("/auth/is-manager", headers=manager_headers).json() == {"isManager": True}
    assert client.get("/auth/is-manager").json() == {"isManager": False}


def test_login(client, manager_headers):
    employee = _create_employee(client, manager_headers)

    ok = client.post("/auth/login", json={"username": "maria", "password": "secret"})
    assert ok.status_code == 200
    assert ok.json()["id"] == employee["id"]
    assert "password_hash" not in ok.json()

    assert client.post("/auth/login", json={"username": "maria", "password": "nope"}).status_code == 401


def test_me_routes_need_an_employee_header(client):
    assert client.get("/me/dashboard").status_code == 400
    assert client.get("/me/dashboard", headers={"X-Employee-Id": "not-a-uuid"}).status_code == 400
    assert (
        client.get("/me/dashboard", headers={"X-Employee-Id": "00000000-0000-0000-0000-000000000000"}).status_code
        == 404
    )


def test_record_events_and_read_dashboard(client, manager_headers):
    employee = _create_employee(client, manager_headers)
    upsell = _create_definition(client, manager_headers, "Upsell", 30)
    late = _create_definition(client, manager_headers, "Late arrival", 5, "negative")

    res = client.post(
        "/events",
        json={"employee_id": employee["id"], "event_type_ids": [upsell["id"], late["id"]], "comment": "Saturday"},
        headers=manager_headers,
    )
    assert res.status_code == 200, res.text
    assert res.json()["total_points"] == 25

    me = {"X-Employee-Id": employee["id"]}
    dashboard = client.get("/me/dashboard", headers=me).json()
    assert dashboard["pointsBalance"] == 25
    assert dashboard["rank"] == 1
    assert len(client.get("/me/events", headers=me).json()) == 2

    reconcile = client.post(f"/employees/{employee['id']}/points/reconcile", headers=manager_headers).json()
    assert reconcile["drift"] == 0


def test_request_approval_flow(client, manager_headers):
    employee = _create_employee(client, manager_headers)
    upsell = _create_definition(client, manager_headers, "Upsell", 15)
    me = {"X-Employee-Id": employee["id"]}

    created = client.post("/me/requests", json={"event_type_id": upsell["id"], "description": "warranty"}, headers=me)
    assert created.status_code == 200, created.text
    request_id = created.json()["id"]

    pending = client.get("/approvals/pending", headers=manager_headers).json()
    assert [r["id"] for r in pending["requests"]] == [request_id]

    approved = client.post(f"/requests/{request_id}/approve", json={"notes": "ok"}, headers=manager_headers)
    assert approved.status_code == 200, approved.text
    assert approved.json()["event"]["points"] == 15

    again = client.post(f"/requests/{request_id}/approve", headers=manager_headers)
    assert again.status_code == 409

    assert client.get("/me/notifications/unread-count", headers=me).json() == {"count": 1}


def test_redemption_flow(client, manager_headers):
    employee = _create_employee(client, manager_headers)
    upsell = _create_definition(client, manager_headers, "Upsell", 40)
    reward = client.post("/rewards", json={"name": "Day off", "points_cost": 50}, headers=manager_headers).json()
    me = {"X-Employee-Id": employee["id"]}

    client.post("/events", json={"employee_id": employee["id"], "event_type_ids": [upsell["id"]]}, headers=manager_headers)

    refused = client.post("/me/redemptions", json={"reward_id": reward["id"]}, headers=me)
    assert refused.status_code == 400

    client.post("/events", json={"employee_id": employee["id"], "event_type_ids": [upsell["id"]]}, headers=manager_headers)

    created = client.post("/me/redemptions", json={"reward_id": reward["id"]}, headers=me)
    assert created.status_code == 200, created.text
    redemption = created.json()
    assert redemption["version"] == 1

    approved = client.post(f"/redemptions/{redemption['id']}/approve", headers=manager_headers)
    assert approved.json()["new_balance"] == 30

    cancel = client.post(f"/me/redemptions/{redemption['id']}/cancel", json={}, headers=me)
    assert cancel.status_code == 409
    assert cancel.json()["detail"] == "Redemption already processed"


def test_revenue_entry_and_week_start(client, manager_headers):
    employee = _create_employee(client, manager_headers)

    res = client.put(
        "/revenue/weekly",
        json={"employee_id": employee["id"], "week_start_date": "2026-10-14", "amount": 120},
        headers=manager_headers,
    )
    assert res.status_code == 200, res.text
    assert res.json()["week_start_date"] == "2026-10-12"
    assert res.json()["revenue_amount"] == 12000

    week = client.get("/revenue/week-start", params={"date": "2026-10-18"}, headers=manager_headers).json()
    assert week["weekStart"] == "2026-10-12"

    overview = client.get("/revenue/monthly", params={"year": 2026, "month": 10}, headers=manager_headers).json()
    assert overview["items"][0]["weeksCount"] == 1


def test_kudos_flow(client, manager_headers):
    sender = _create_employee(client, manager_headers, username="a", full_name="A")
    recipient = _create_employee(client, manager_headers, username="b", full_name="B")

    kudos = client.post(
        "/me/kudos",
        json={"recipient_id": recipient["id"], "message": "Great teamwork"},
        headers={"X-Employee-Id": sender["id"]},
    )
    assert kudos.status_code == 200, kudos.text

    client.post(f"/feedback/{kudos.json()['id']}/approve", headers=manager_headers)

    received = client.get("/me/kudos/received", headers={"X-Employee-Id": recipient["id"]}).json()
    assert [k["id"] for k in received] == [kudos.json()["id"]]


def test_event_definition_in_use_cannot_be_deleted(client, manager_headers):
    employee = _create_employee(client, manager_headers)
    upsell = _create_definition(client, manager_headers)
    client.post("/events", json={"employee_id": employee["id"], "event_type_ids": [upsell["id"]]}, headers=manager_headers)

    res = client.delete(f"/admin/events-settings/{upsell['id']}", headers=manager_headers)
    assert res.status_code == 400

    unused = _create_definition(client, manager_headers, "Unused")
    assert client.delete(f"/admin/events-settings/{unused['id']}", headers=manager_headers).json() == {"deleted": True}


def test_ui_options_list_enabled_events_only(client, manager_headers):
    _create_definition(client, manager_headers, "Upsell")
    disabled = _create_definition(client, manager_headers, "Retired")
    client.patch(f"/admin/events-settings/{disabled['id']}", json={"is_enabled": False}, headers=manager_headers)

    items = client.get("/ui-options/event-types").json()["items"]

    assert [i["name"] for i in items] == ["Upsell"]


def test_password_change(client, manager_headers):
    employee = _create_employee(client, manager_headers)
    me = {"X-Employee-Id": employee["id"]}

    wrong = client.post("/me/password", json={"current_password": "nope", "new_password": "newpass"}, headers=me)
    assert wrong.status_code == 400

    ok = client.post("/me/password", json={"current_password": "secret", "new_password": "newpass"}, headers=me)
    assert ok.json() == {"updated": True}
    assert client.post("/auth/login", json={"username": "maria", "password": "newpass"}).status_code == 200


def test_patch_cannot_clear_required_fields(client, manager_headers):
    employee = _create_employee(client, manager_headers)

    res = client.patch(f"/employees/{employee['id']}", json={"full_name": None}, headers=manager_headers)
    assert res.status_code == 400
    assert res.json()["detail"] == "full_name cannot be null"
    assert client.get(f"/employees/{employee['id']}", headers=manager_headers).json()["full_name"] == "Maria P."

    # optional columns may still be cleared
    res = client.patch(f"/employees/{employee['id']}", json={"position": None}, headers=manager_headers)
    assert res.status_code == 200

    reward = client.post("/rewards", json={"name": "Day off", "points_cost": 50}, headers=manager_headers).json()
    res = client.patch(f"/rewards/{reward['id']}", json={"points_cost": None}, headers=manager_headers)
    assert res.status_code == 400

    definition = _create_definition(client, manager_headers)
    res = client.patch(f"/admin/events-settings/{definition['id']}", json={"is_enabled": None}, headers=manager_headers)
    assert res.status_code == 400

    store = client.post("/stores", json={"name": "Athens"}, headers=manager_headers).json()
    res = client.patch(f"/stores/{store['id']}", json={"name": None}, headers=manager_headers)
    assert res.status_code == 400
