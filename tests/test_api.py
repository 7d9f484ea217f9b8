from fastapi.testclient import TestClient


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register_school(client: TestClient, username="lincoln", goal=1000) -> dict:
    response = client.post("/api/register/school", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
        "confirm_password": "secret123",
        "school_name": f"{username.title()} Elementary",
        "admin_name": "Pat Smith",
        "fundraising_goal": goal,
    })
    assert response.status_code == 201, response.text
    return response.json()


def register_student(client: TestClient, school_id: int, username: str, grade="5", goal=None) -> dict:
    response = client.post("/api/register/student", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
        "first_name": username.title(),
        "last_name": "Lee",
        "grade": grade,
        "school_id": school_id,
        "personal_goal": goal,
        "parent_consent": True,
    })
    assert response.status_code == 201, response.text
    return response.json()


def donate(client: TestClient, student_id: int, amount) -> dict:
    response = client.post("/api/donations", json={"student_id": student_id, "amount": amount})
    assert response.status_code == 201, response.text
    return response.json()


def seed_example(client: TestClient) -> dict:
    school = register_school(client)
    a = register_student(client, school["school"]["id"], "alice", grade="5", goal=100)
    b = register_student(client, school["school"]["id"], "bruno", grade="6", goal=200)
    donate(client, a["student"]["id"], 30)
    donate(client, a["student"]["id"], 40)
    donate(client, b["student"]["id"], 50)
    return {"school": school, "a": a, "b": b}


def test_register_and_login(client: TestClient) -> None:
    registered = register_school(client)
    assert registered["user"]["role"] == "school"
    assert registered["school"]["fundraising_goal"] == 1000
    assert "password_hash" not in registered["user"]

    response = client.post("/api/token", data={"username": "lincoln", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert token == registered["access_token"]

    me = client.get("/api/user", headers=auth(token))
    assert me.json()["username"] == "lincoln"


def test_login_rejects_wrong_password(client: TestClient) -> None:
    register_school(client)
    response = client.post("/api/token", data={"username": "lincoln", "password": "wrong-one"})
    assert response.status_code == 401


def test_plain_register(client: TestClient) -> None:
    response = client.post("/api/register", json={
        "username": "donor", "email": "donor@example.com", "password": "secret123", "role": "student",
    })
    assert response.status_code == 201
    assert response.json()["role"] == "student"


def test_duplicate_username_and_email_are_rejected(client: TestClient) -> None:
    register_school(client)
    response = client.post("/api/register/school", json={
        "username": "lincoln", "email": "new@example.com", "password": "secret123", "school_name": "X",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"

    response = client.post("/api/register/school", json={
        "username": "newname", "email": "lincoln@example.com", "password": "secret123", "school_name": "X",
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already exists"


def test_school_registration_checks_password_confirmation(client: TestClient) -> None:
    response = client.post("/api/register/school", json={
        "username": "lincoln", "email": "l@example.com", "password": "secret123",
        "confirm_password": "different", "school_name": "Lincoln",
    })
    assert response.status_code == 422


def test_student_registration_needs_existing_school(client: TestClient) -> None:
    response = client.post("/api/register/student", json={
        "username": "alice", "email": "alice@example.com", "password": "secret123",
        "first_name": "Alice", "last_name": "Lee", "grade": "5", "school_id": 99, "parent_consent": True,
    })
    assert response.status_code == 400


def test_donation_validation(client: TestClient) -> None:
    assert client.post("/api/donations", json={"student_id": 1, "amount": 10}).status_code == 404

    school = register_school(client)
    student = register_student(client, school["school"]["id"], "alice")
    sid = student["student"]["id"]
    assert client.post("/api/donations", json={"student_id": sid, "amount": -5}).status_code == 422
    assert client.post("/api/donations", json={"student_id": sid, "amount": "abc"}).status_code == 422

    created = donate(client, sid, "12.50")
    assert created["amount"] == 12.5
    assert created["student_id"] == sid


def test_school_list_is_public(client: TestClient) -> None:
    register_school(client, "north")
    register_school(client, "south")
    names = [s["name"] for s in client.get("/api/schools").json()]
    assert names == ["North Elementary", "South Elementary"]


def test_school_dashboard(client: TestClient) -> None:
    seed = seed_example(client)
    response = client.get("/api/schools/dashboard", headers=auth(seed["school"]["access_token"]))
    assert response.status_code == 200
    body = response.json()

    assert body["stats"] == {"total_raised": 120, "total_donations": 3, "active_students": 2}
    assert [(s["first_name"], s["amount_raised"], s["goal_progress"]) for s in body["top_students"]] == [
        ("Alice", 70, 70),
        ("Bruno", 50, 25),
    ]
    assert len(body["recent_donations"]) == 3
    assert body["recent_donations"][0]["amount"] == 50
    assert body["recent_donations"][0]["student"]["first_name"] == "Bruno"


def test_dashboards_check_role(client: TestClient) -> None:
    seed = seed_example(client)
    assert client.get("/api/schools/dashboard").status_code == 401
    assert client.get("/api/schools/dashboard", headers=auth("not-a-number")).status_code == 401
    assert client.get("/api/schools/dashboard", headers=auth(seed["a"]["access_token"])).status_code == 401
    assert client.get("/api/students/dashboard", headers=auth(seed["school"]["access_token"])).status_code == 401


def test_student_dashboard(client: TestClient) -> None:
    seed = seed_example(client)
    response = client.get("/api/students/dashboard", headers=auth(seed["a"]["access_token"]))
    assert response.status_code == 200
    body = response.json()

    assert body["stats"] == {
        "total_raised": 70, "total_donations": 2, "largest_donation": 40, "average_donation": 35,
    }
    assert body["goal_progress"] == 70
    assert body["school_stats"]["total_raised"] == 120
    assert body["school_goal_progress"] == 12
    assert body["class_rankings"] == [
        {"grade": "5", "total_raised": 70, "student_count": 1, "percentage": 58},
        {"grade": "6", "total_raised": 50, "student_count": 1, "percentage": 42},
    ]
    assert [d["amount"] for d in body["recent_donations"]] == [40, 30]
    assert body["days_remaining"] == 30


def test_public_school_page(client: TestClient) -> None:
    seed = seed_example(client)
    school_id = seed["school"]["school"]["id"]
    headers = auth(seed["school"]["access_token"])
    for title, date in [("Old", "2000-01-01T10:00:00"), ("Fair", "2099-05-01T10:00:00"),
                        ("Gala", "2099-02-01T18:00:00")]:
        client.post(f"/api/schools/{school_id}/events", json={"title": title, "date": date}, headers=headers)

    body = client.get(f"/api/schools/{school_id}").json()

    assert body["goal_progress"] == 12
    assert body["stats"]["total_donations"] == 3
    assert [s["amount_raised"] for s in body["top_students"]] == [70, 50]
    assert [e["title"] for e in body["upcoming_events"]] == ["Gala", "Fair"]
    assert client.get("/api/schools/999").status_code == 404


def test_roster_caps_progress_while_ranking_does_not(client: TestClient) -> None:
    school = register_school(client)
    school_id = school["school"]["id"]
    star = register_student(client, school_id, "star", goal=50)
    register_student(client, school_id, "nogoal")
    donate(client, star["student"]["id"], 80)

    roster = client.get(f"/api/schools/{school_id}/students", headers=auth(school["access_token"])).json()
    assert [(s["first_name"], s["goal_progress"]) for s in roster] == [("Star", 100), ("Nogoal", 0)]
    assert roster[0]["stats"]["total_raised"] == 80

    ranking = client.get(f"/api/stats/schools/{school_id}/top-students").json()
    assert ranking[0]["goal_progress"] == 160


def test_roster_is_private_to_its_school(client: TestClient) -> None:
    seed = seed_example(client)
    other = register_school(client, "other")
    school_id = seed["school"]["school"]["id"]

    response = client.get(f"/api/schools/{school_id}/students", headers=auth(other["access_token"]))
    assert response.status_code == 403


def test_student_donation_history_access(client: TestClient) -> None:
    seed = seed_example(client)
    a_id = seed["a"]["student"]["id"]
    other = register_school(client, "other")

    own = client.get(f"/api/students/{a_id}/donations", headers=auth(seed["a"]["access_token"]))
    assert [d["amount"] for d in own.json()] == [40, 30]

    as_school = client.get(f"/api/students/{a_id}/donations", headers=auth(seed["school"]["access_token"]))
    assert as_school.status_code == 200

    assert client.get(f"/api/students/{a_id}/donations", headers=auth(seed["b"]["access_token"])).status_code == 403
    assert client.get(f"/api/students/{a_id}/donations", headers=auth(other["access_token"])).status_code == 403
    assert client.get("/api/students/999/donations", headers=auth(seed["a"]["access_token"])).status_code == 404


def test_event_lifecycle(client: TestClient) -> None:
    school = register_school(client)
    school_id = school["school"]["id"]
    headers = auth(school["access_token"])

    created = client.post(f"/api/schools/{school_id}/events", headers=headers, json={
        "title": "Bake Sale", "date": "2099-03-01T09:00:00Z", "location": "Gym",
    })
    assert created.status_code == 201
    event = created.json()
    assert event["date"] == "2099-03-01T09:00:00"

    client.post(f"/api/schools/{school_id}/events", headers=headers,
                json={"title": "Fun Run", "date": "2099-01-15T09:00:00"})
    titles = [e["title"] for e in client.get(f"/api/schools/{school_id}/events").json()]
    assert titles == ["Fun Run", "Bake Sale"]

    updated = client.put(f"/api/events/{event['id']}", headers=headers, json={"title": "Big Bake Sale"})
    assert updated.status_code == 200
    assert updated.json()["title"] == "Big Bake Sale"
    assert updated.json()["location"] == "Gym"
    assert updated.json()["date"] == "2099-03-01T09:00:00"

    other = register_school(client, "other")
    assert client.put(f"/api/events/{event['id']}", headers=auth(other["access_token"]),
                      json={"title": "Mine"}).status_code == 403
    assert client.delete(f"/api/events/{event['id']}", headers=auth(other["access_token"])).status_code == 403

    assert client.delete(f"/api/events/{event['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/events/{event['id']}", headers=headers).status_code == 404
    assert [e["title"] for e in client.get(f"/api/schools/{school_id}/events").json()] == ["Fun Run"]


def test_events_of_other_school_cannot_be_created(client: TestClient) -> None:
    school = register_school(client)
    other = register_school(client, "other")
    response = client.post(f"/api/schools/{school['school']['id']}/events", headers=auth(other["access_token"]),
                           json={"title": "Intruder", "date": "2099-01-01T00:00:00"})
    assert response.status_code == 403


def test_profile_by_role(client: TestClient) -> None:
    seed = seed_example(client)

    school_profile = client.get("/api/profile", headers=auth(seed["school"]["access_token"])).json()
    assert school_profile["school"]["name"] == "Lincoln Elementary"
    assert school_profile["stats"]["active_students"] == 2

    student_profile = client.get("/api/profile", headers=auth(seed["b"]["access_token"])).json()
    assert student_profile["student"]["first_name"] == "Bruno"
    assert student_profile["school"]["id"] == seed["school"]["school"]["id"]
    assert student_profile["stats"]["largest_donation"] == 50


def test_stats_endpoints(client: TestClient) -> None:
    seed = seed_example(client)
    school_id = seed["school"]["school"]["id"]
    a_id = seed["a"]["student"]["id"]

    assert client.get(f"/api/stats/students/{a_id}").json()["average_donation"] == 35
    assert client.get(f"/api/stats/schools/{school_id}").json()["total_raised"] == 120
    assert client.get("/api/stats/students/999").status_code == 404
    assert client.get("/api/stats/schools/999").status_code == 404

    top = client.get(f"/api/stats/schools/{school_id}/top-students", params={"limit": 1}).json()
    assert [s["first_name"] for s in top] == ["Alice"]
    assert client.get(f"/api/stats/schools/{school_id}/top-students", params={"limit": 0}).status_code == 422


def test_event_update_rejects_null_title_and_date(client: TestClient) -> None:
    school = register_school(client)
    headers = auth(school["access_token"])
    event = client.post(f"/api/schools/{school['school']['id']}/events", headers=headers,
                        json={"title": "Fun Run", "date": "2099-01-15T09:00:00"}).json()

    assert client.put(f"/api/events/{event['id']}", headers=headers, json={"title": None}).status_code == 422
    assert client.put(f"/api/events/{event['id']}", headers=headers, json={"date": None}).status_code == 422

    cleared = client.put(f"/api/events/{event['id']}", headers=headers, json={"location": None})
    assert cleared.status_code == 200
    assert cleared.json()["title"] == "Fun Run"
    assert cleared.json()["date"] == "2099-01-15T09:00:00"


def test_goals_must_fit_money_columns(client: TestClient) -> None:
    response = client.post("/api/register/school", json={
        "username": "lincoln", "email": "l@example.com", "password": "secret123",
        "school_name": "Lincoln", "fundraising_goal": "100.005",
    })
    assert response.status_code == 422

    response = client.post("/api/register/school", json={
        "username": "lincoln", "email": "l@example.com", "password": "secret123",
        "school_name": "Lincoln", "fundraising_goal": "12345678901234",
    })
    assert response.status_code == 422

    school = register_school(client)
    response = client.post("/api/register/student", json={
        "username": "alice", "email": "alice@example.com", "password": "secret123",
        "first_name": "Alice", "last_name": "Lee", "grade": "5",
        "school_id": school["school"]["id"], "personal_goal": "10.999", "parent_consent": True,
    })
    assert response.status_code == 422


def test_student_registration_requires_parent_consent(client: TestClient) -> None:
    school = register_school(client)
    payload = {
        "username": "alice", "email": "alice@example.com", "password": "secret123",
        "first_name": "Alice", "last_name": "Lee", "grade": "5", "school_id": school["school"]["id"],
    }

    assert client.post("/api/register/student", json=payload).status_code == 422
    assert client.post("/api/register/student", json={**payload, "parent_consent": False}).status_code == 422

    registered = client.post("/api/register/student", json={**payload, "parent_consent": True})
    assert registered.status_code == 201
    assert registered.json()["student"]["parent_consent"] is True
