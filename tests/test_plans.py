from fitcoach.models import DietPlan, FoodItem, WorkoutPlan


def test_no_active_plan(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    assert client.get(f"/api/members/{member.id}/diet-plan", headers=headers).get_json() == {"plan": None}
    assert client.get(f"/api/members/{member.id}/workout-plan", headers=headers).get_json() == {"plan": None}


def test_member_generates_default_diet_plan(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    client.put(f"/api/members/{member.id}/profile", json={
        "goal": "muscle_gain", "weight_kg": 80, "target_calories": 2600,
    }, headers=headers)

    resp = client.post(f"/api/members/{member.id}/diet-plan/generate-default", headers=headers)
    assert resp.status_code == 201

    plan = client.get(f"/api/members/{member.id}/diet-plan", headers=headers).get_json()["plan"]
    assert plan["id"] == str(resp.get_json()["id"])
    assert plan["name"] == "Muscle Gain Diet Plan"
    assert plan["type"] == "system"
    assert plan["dailyCalories"] == 2600
    assert plan["dailyProtein"] == 144
    assert plan["dailyCarbs"] == 344
    assert plan["dailyFat"] == 72
    assert plan["meals"] == []


def test_regenerating_keeps_one_active_plan(client, make_user, auth_headers):
    member = make_user("member")
    headers = auth_headers(member)
    client.post(f"/api/members/{member.id}/diet-plan/generate-default", headers=headers)
    second = client.post(f"/api/members/{member.id}/diet-plan/generate-default", headers=headers).get_json()["id"]

    active = DietPlan.query.filter_by(member_id=member.id, is_active=True).all()
    assert [p.id for p in active] == [second]
    assert DietPlan.query.filter_by(member_id=member.id).count() == 2


def test_trainer_cannot_touch_diet_plans(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)
    headers = auth_headers(trainer)
    assert client.get(f"/api/members/{member.id}/diet-plan", headers=headers).status_code == 403
    assert client.post(f"/api/members/{member.id}/diet-plan/generate-default", headers=headers).status_code == 403


def test_nutritionist_manual_diet_plan(client, make_user, auth_headers, assign, db):
    member = make_user("member")
    nutritionist = make_user("nutritionist", full_name="Nora Nutrition")
    assign(member, nutritionist=nutritionist)
    oats = FoodItem(name="Oats", calories=389, protein=17, carbs=66, fat=7)
    db.session.add(oats)
    db.session.commit()

    resp = client.post(f"/api/members/{member.id}/diet-plan/manual", json={
        "name": "Cut phase",
        "goal": "fat loss",
        "meals": [
            {
                "mealType": "Breakfast",
                "items": [
                    {"foodId": oats.id, "quantity": 50, "calories": 195, "protein": 8.5, "carbs": 33, "fat": 3.5},
                    {"name": "Greek Yogurt", "quantity": 200, "calories": 120, "protein": 20, "carbs": 8, "fat": 0},
                ],
            },
            {"mealType": "midnight feast", "items": []},
        ],
    }, headers=auth_headers(nutritionist))
    assert resp.status_code == 201

    plan = client.get(f"/api/members/{member.id}/diet-plan", headers=auth_headers(member)).get_json()["plan"]
    assert plan["type"] == "trainer"
    assert plan["createdBy"] == "Nora Nutrition"
    assert plan["dailyCalories"] == 315
    assert plan["dailyProtein"] == 28.5
    assert [m["mealType"] for m in plan["meals"]] == ["breakfast", "snack"]
    assert [f["name"] for f in plan["meals"][0]["foods"]] == ["Oats", "Greek Yogurt"]

    yogurt = FoodItem.query.filter_by(name="Greek Yogurt").one()
    assert yogurt.calories == 60
    assert yogurt.protein == 10
    assert yogurt.source_api == "manual_plan"


def test_member_cannot_write_manual_diet_plan(client, make_user, auth_headers):
    member = make_user("member")
    resp = client.post(f"/api/members/{member.id}/diet-plan/manual", json={"meals": []}, headers=auth_headers(member))
    assert resp.status_code == 403


def test_trainer_generates_default_workout_plan(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)
    client.put(f"/api/members/{member.id}/profile", json={
        "goal": "strength", "trainer_intake": {"daysPerWeek": 2, "fitnessLevel": "intermediate"},
    }, headers=auth_headers(member))

    resp = client.post(f"/api/members/{member.id}/workout-plan/generate-default", headers=auth_headers(trainer))
    assert resp.status_code == 201

    plan = client.get(f"/api/members/{member.id}/workout-plan", headers=auth_headers(member)).get_json()["plan"]
    assert plan["type"] == "trainer"
    assert plan["weeklyDays"] == 2
    assert plan["difficulty"] == "Intermediate"
    assert [w["day"] for w in plan["workouts"]] == ["Monday", "Thursday"]
    assert plan["workouts"][0]["exercises"][0]["name"] == "Squats"


def test_manual_workout_plan(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)

    resp = client.post(f"/api/members/{member.id}/workout-plan/manual", json={
        "name": "Hypertrophy block",
        "days": [
            {
                "dayOfWeek": "Tuesday",
                "name": "Push",
                "durationMinutes": 60,
                "focus": "chest, triceps",
                "exercises": [
                    {"name": "Bench Press", "sets": 4, "reps": "8", "instructions": "Pause at the bottom",
                     "intensity": "RPE 8", "targetMuscles": "chest, triceps"},
                    {"name": "Cable Fly", "category": "chest"},
                    {"sets": 3},
                ],
            },
        ],
    }, headers=auth_headers(trainer))
    assert resp.status_code == 201

    plan = WorkoutPlan.query.filter_by(member_id=member.id, is_active=True).one()
    assert plan.weekly_days == 1
    exercises = plan.days[0].exercises
    assert [e.name for e in exercises] == ["Bench Press", "Cable Fly"]
    assert exercises[0].instructions == "Pause at the bottom | Intensity: RPE 8"
    assert exercises[1].target_muscles == "chest"

    body = client.get(f"/api/members/{member.id}/workout-plan", headers=auth_headers(member)).get_json()["plan"]
    assert body["estimatedDuration"] == 60
    assert body["difficulty"] == "Custom"
    assert body["workouts"][0]["focus"] == ["chest", "triceps"]


def test_nutritionist_cannot_write_workout_plans(client, make_user, auth_headers, assign):
    member = make_user("member")
    nutritionist = make_user("nutritionist")
    assign(member, nutritionist=nutritionist)
    resp = client.post(f"/api/members/{member.id}/workout-plan/manual", json={"days": []},
                       headers=auth_headers(nutritionist))
    assert resp.status_code == 403


def test_generate_for_unknown_member(client, make_user, auth_headers):
    admin = make_user("admin")
    resp = client.post("/api/members/4242/workout-plan/generate-default", headers=auth_headers(admin))
    assert resp.status_code == 404
