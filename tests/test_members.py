from fitcoach.models import WeightLog


PROFILE = {
    "age": 30,
    "gender": "male",
    "weight_kg": 80,
    "height_cm": 180,
    "goal": "weight_loss",
    "activity_level": "moderate",
    "weekly_workout_minutes": 150,
    "trainer_intake": {"daysPerWeek": 4},
}


def test_profile_round_trip_fills_energy_figures(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)

    assert client.get(f"/api/members/{member.id}/profile", headers=headers).get_json()["profile"]["bmr"] is None

    resp = client.put(f"/api/members/{member.id}/profile", json=PROFILE, headers=headers)
    assert resp.status_code == 200
    profile = resp.get_json()["profile"]
    assert profile["bmr"] == 1780
    assert profile["tdee"] == 2759
    assert profile["targetCalories"] == 2259
    assert profile["weeklyWorkoutMinutes"] == 150
    assert profile["trainerIntake"] == {"daysPerWeek": 4}

    again = client.get(f"/api/members/{member.id}/profile", headers=headers).get_json()["profile"]
    assert again["goal"] == "weight_loss"


def test_profile_keeps_client_supplied_figures(client, make_user, auth_headers):
    member = make_user("member")
    body = dict(PROFILE, bmr=1500, tdee=2000, target_calories=1800)
    profile = client.put(f"/api/members/{member.id}/profile", json=body, headers=auth_headers(member)).get_json()
    assert profile["profile"]["targetCalories"] == 1800


def test_profile_rounds_half_bmr_up(client, make_user, auth_headers):
    member = make_user("member")
    body = dict(PROFILE, height_cm=182, goal="maintain", activity_level="sedentary")
    profile = client.put(f"/api/members/{member.id}/profile", json=body, headers=auth_headers(member)).get_json()
    assert profile["profile"]["bmr"] == 1793
    assert profile["profile"]["tdee"] == 2151


def test_profile_validation_error(client, make_user, auth_headers):
    member = make_user("member")
    resp = client.put(f"/api/members/{member.id}/profile", json={"age": "old"}, headers=auth_headers(member))
    assert resp.status_code == 400


def test_admin_profile_of_missing_member(client, make_user, auth_headers):
    admin = make_user("admin")
    assert client.get("/api/members/999/profile", headers=auth_headers(admin)).get_json() == {"profile": None}
    assert client.put("/api/members/999/profile", json={}, headers=auth_headers(admin)).status_code == 404


def test_overview_scopes_to_assigned_members(client, make_user, auth_headers, assign):
    trainer = make_user("trainer")
    mine = make_user("member")
    make_user("member")
    assign(mine, trainer=trainer)
    client.post("/api/meals", json={"member_id": mine.id, "meal_type": "dinner", "calories": 700},
                headers=auth_headers(mine))

    members = client.get("/api/members/overview", headers=auth_headers(trainer)).get_json()["members"]
    assert [m["id"] for m in members] == [mine.id]
    assert members[0]["meals_today"] == 1
    assert members[0]["total_calories_today"] == 700
    assert members[0]["trainer_id"] == trainer.id

    admin = make_user("admin")
    assert len(client.get("/api/members/overview", headers=auth_headers(admin)).get_json()["members"]) == 2


def test_overview_forbidden_for_members(client, make_user, auth_headers):
    member = make_user("member")
    assert client.get("/api/members/overview", headers=auth_headers(member)).status_code == 403


def test_check_in_records_weight(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)

    resp = client.post(f"/api/members/{member.id}/check-ins", json={
        "adherence": 8, "fatigue": 3, "weightKg": 79.5, "notes": "good week",
    }, headers=auth_headers(member))
    assert resp.status_code == 201
    assert resp.get_json()["checkIn"]["weight_kg"] == 79.5
    assert WeightLog.query.filter_by(member_id=member.id).count() == 1

    # Coaches can read but not write check-ins
    listed = client.get(f"/api/members/{member.id}/check-ins", headers=auth_headers(trainer)).get_json()
    assert len(listed["checkIns"]) == 1
    resp = client.post(f"/api/members/{member.id}/check-ins", json={"adherence": 5}, headers=auth_headers(trainer))
    assert resp.status_code == 403


def test_progress_summary(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    client.put(f"/api/members/{member.id}/profile", json=PROFILE, headers=headers)
    client.post(f"/api/members/{member.id}/check-ins", json={"weightKg": 80}, headers=headers)
    client.post(f"/api/members/{member.id}/check-ins", json={"weightKg": 78.5}, headers=headers)
    client.post("/api/workouts", json={"member_id": member.id, "exercise_name": "Cycling", "duration_minutes": 30},
                headers=headers)

    summary = client.get(f"/api/members/{member.id}/progress-summary", headers=headers).get_json()
    assert summary["stats"]["start_weight_kg"] == 80
    assert summary["stats"]["current_weight_kg"] == 78.5
    assert summary["stats"]["total_weight_lost_kg"] == 1.5
    assert summary["stats"]["workouts_completed"] == 1
    assert summary["targets"]["calorie_target"] == 2259
    assert summary["targets"]["weekly_workout_sessions_target"] == 5
    assert summary["targets"]["monthly_workout_sessions_target"] == 20
    assert len(summary["charts"]["calories"]) == 7
    assert len(summary["charts"]["weight"]) == 1


def test_dashboard_summary(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    client.post("/api/meals", json={"member_id": member.id, "meal_type": "lunch", "calories": 600, "protein": 40},
                headers=headers)
    client.post("/api/workouts", json={
        "member_id": member.id, "exercise_name": "Cycling", "duration_minutes": 30, "calories_burned": 250,
    }, headers=headers)

    summary = client.get(f"/api/members/{member.id}/dashboard-summary?days=500", headers=headers).get_json()
    assert len(summary["days"]) == 1
    day = summary["days"][0]
    assert day["calories_consumed"] == 600
    assert day["calories_burned"] == 250
    assert day["protein"] == 40
    assert [a["type"] for a in summary["activities"]] == ["meal", "workout"]


def test_schedule_created_by_trainer_visible_to_member(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)

    resp = client.post("/api/trainer/schedule", json={
        "member_id": member.id, "session_type": "personal", "session_date": "2030-05-01", "session_time": "09:30",
    }, headers=auth_headers(trainer))
    assert resp.status_code == 201
    client.post("/api/trainer/schedule", json={
        "member_id": member.id, "session_type": "online", "session_date": "2030-04-01", "session_time": "18:00",
    }, headers=auth_headers(trainer))

    sessions = client.get(f"/api/members/{member.id}/schedule", headers=auth_headers(member)).get_json()["sessions"]
    assert [s["session_date"] for s in sessions] == ["2030-04-01", "2030-05-01"]
    assert sessions[1]["session_time"] == "09:30:00"
    assert sessions[1]["trainer_name"] == trainer.full_name

    filtered = client.get(f"/api/members/{member.id}/schedule?from=2030-04-15", headers=auth_headers(member))
    assert len(filtered.get_json()["sessions"]) == 1

    own = client.get("/api/trainer/schedule?to=2030-04-30", headers=auth_headers(trainer)).get_json()["sessions"]
    assert [s["member_id"] for s in own] == [member.id]


def test_trainer_schedule_rules(client, make_user, auth_headers):
    member = make_user("member")
    trainer = make_user("trainer")
    session = {"member_id": member.id, "session_type": "group", "session_date": "2030-01-01", "session_time": "07:00"}

    assert client.post("/api/trainer/schedule", json=session, headers=auth_headers(trainer)).status_code == 403
    bad = dict(session, session_type="yoga")
    assert client.post("/api/trainer/schedule", json=bad, headers=auth_headers(make_user("admin"))).status_code == 400
    assert client.get("/api/trainer/schedule", headers=auth_headers(member)).status_code == 403
    assert client.get("/api/trainer/schedule?from=soon", headers=auth_headers(trainer)).status_code == 400
