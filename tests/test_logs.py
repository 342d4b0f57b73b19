from fitcoach.models import Exercise, MealLogItem
from fitcoach.utils.dates import utcnow


def log_meal(client, headers, member_id, **fields):
    payload = {"member_id": member_id, "meal_type": "lunch", "calories": 400, "protein": 30, "carbs": 40, "fat": 10}
    payload.update(fields)
    return client.post("/api/meals", json=payload, headers=headers)


def test_member_logs_and_reads_meals(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)

    resp = log_meal(client, headers, member.id)
    assert resp.status_code == 201
    assert set(resp.get_json()) == {"meal_log_id", "item_id"}
    log_meal(client, headers, member.id, meal_type="lunch", calories=100)
    log_meal(client, headers, member.id, meal_type="breakfast", calories=250)

    today = client.get(f"/api/meals/today?member_id={member.id}", headers=headers).get_json()["meals"]
    assert len(today) == 3

    day = utcnow().date().isoformat()
    by_date = client.get(f"/api/meals/by-date?member_id={member.id}&date={day}", headers=headers).get_json()["meals"]
    lunch = next(m for m in by_date if m["meal_type"] == "lunch")
    assert lunch["meal_count"] == 2
    assert lunch["items_count"] == 2
    assert lunch["total_calories"] == 500


def test_meal_validation(client, make_user, auth_headers):
    member = make_user("member")
    resp = log_meal(client, auth_headers(member), member.id, meal_type="brunch")
    assert resp.status_code == 400
    assert "meal_type" in resp.get_json()["errors"]


def test_cannot_log_for_someone_else(client, make_user, auth_headers):
    member = make_user("member")
    other = make_user("member")
    assert log_meal(client, auth_headers(member), other.id).status_code == 403


def test_by_date_rejects_bad_date(client, make_user, auth_headers):
    member = make_user("member")
    resp = client.get(f"/api/meals/by-date?member_id={member.id}&date=2024-13-01", headers=auth_headers(member))
    assert resp.status_code == 400


def test_assigned_nutritionist_reads_logs(client, make_user, auth_headers, assign):
    member = make_user("member")
    nutritionist = make_user("nutritionist")
    stranger = make_user("nutritionist")
    assign(member, nutritionist=nutritionist)
    log_meal(client, auth_headers(member), member.id)

    resp = client.get(f"/api/meals/today?member_id={member.id}", headers=auth_headers(nutritionist))
    assert resp.status_code == 200
    assert len(resp.get_json()["meals"]) == 1

    resp = client.get(f"/api/meals/today?member_id={member.id}", headers=auth_headers(stranger))
    assert resp.status_code == 403


def test_recent_meals_scoped_to_requester(client, make_user, auth_headers, assign):
    mine = make_user("member")
    theirs = make_user("member")
    trainer = make_user("trainer")
    admin = make_user("admin")
    assign(mine, trainer=trainer)
    log_meal(client, auth_headers(mine), mine.id)
    log_meal(client, auth_headers(theirs), theirs.id)

    own = client.get("/api/meals/recent", headers=auth_headers(mine)).get_json()["meals"]
    assert {m["member_id"] for m in own} == {mine.id}

    coached = client.get("/api/meals/recent", headers=auth_headers(trainer)).get_json()["meals"]
    assert {m["member_id"] for m in coached} == {mine.id}

    everything = client.get("/api/meals/recent?limit=500", headers=auth_headers(admin)).get_json()["meals"]
    assert len(everything) == 2


def test_delete_meal_item_owner_only(client, make_user, auth_headers, db):
    member = make_user("member")
    other = make_user("member")
    item_id = log_meal(client, auth_headers(member), member.id).get_json()["item_id"]

    assert client.delete(f"/api/meals/items/{item_id}", headers=auth_headers(other)).status_code == 403
    assert client.delete(f"/api/meals/items/{item_id}", headers=auth_headers(member)).status_code == 204
    assert client.delete(f"/api/meals/items/{item_id}", headers=auth_headers(member)).status_code == 404
    db.session.expire_all()
    assert db.session.get(MealLogItem, item_id) is None


def test_workout_by_name_creates_exercise(client, make_user, auth_headers, db):
    member = make_user("member")
    headers = auth_headers(member)
    payload = {"member_id": member.id, "exercise_name": "Rowing", "duration_minutes": 20, "calories_burned": 200}

    assert client.post("/api/workouts", json=payload, headers=headers).status_code == 201
    payload["exercise_name"] = "rowing"
    assert client.post("/api/workouts", json=payload, headers=headers).status_code == 201

    rowing = Exercise.query.filter(Exercise.name.ilike("rowing")).all()
    assert len(rowing) == 1
    assert rowing[0].calories_per_min == 10

    workouts = client.get(f"/api/workouts/today?member_id={member.id}", headers=headers).get_json()["workouts"]
    assert len(workouts) == 2
    assert {w["exercise_name"] for w in workouts} == {"Rowing"}


def test_workout_requires_positive_duration_and_exercise(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    resp = client.post("/api/workouts", json={"member_id": member.id, "exercise_name": "Run", "duration_minutes": 0},
                       headers=headers)
    assert resp.status_code == 400
    resp = client.post("/api/workouts", json={"member_id": member.id, "duration_minutes": 10}, headers=headers)
    assert resp.status_code == 400


def test_delete_workout_item(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    item_id = client.post("/api/workouts", json={
        "member_id": member.id, "exercise_name": "Yoga", "duration_minutes": 30,
    }, headers=headers).get_json()["item_id"]
    assert client.delete(f"/api/workouts/items/{item_id}", headers=headers).status_code == 204
