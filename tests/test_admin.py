from fitcoach.models import (
    DietPlan, MealLog, Notification, Schedule, TrainerAssignment, User,
)


def test_admin_routes_require_admin(client, make_user, auth_headers):
    trainer = make_user("trainer")
    assert client.get("/api/admin/users", headers=auth_headers(trainer)).status_code == 403
    assert client.get("/api/admin/users").status_code == 401


def test_invite_and_list_users(client, make_user, auth_headers, db):
    admin = make_user("admin")
    headers = auth_headers(admin)

    resp = client.post("/api/admin/users/invite", json={
        "full_name": "Tina Trainer", "email": "Tina@Example.com", "role": "trainer",
    }, headers=headers)
    assert resp.status_code == 201
    invited = db.session.get(User, resp.get_json()["id"])
    assert invited.email == "tina@example.com"
    assert invited.status == "pending"

    dup = client.post("/api/admin/users/invite", json={
        "full_name": "Tina Again", "email": "tina@example.com", "role": "member",
    }, headers=headers)
    assert dup.status_code == 409
    assert dup.get_json()["msg"] == "A user with this email already exists"

    users = client.get("/api/admin/users", headers=headers).get_json()
    tina = next(u for u in users if u["email"] == "tina@example.com")
    assert tina["isActivated"] is False
    assert tina["role"] == "trainer"


def test_invite_validation(client, make_user, auth_headers):
    admin = make_user("admin")
    resp = client.post("/api/admin/users/invite", json={"full_name": "X", "email": "bad", "role": "coach"},
                       headers=auth_headers(admin))
    assert resp.status_code == 400
    assert set(resp.get_json()["errors"]) == {"email", "role"}


def test_get_missing_user(client, make_user, auth_headers):
    admin = make_user("admin")
    assert client.get("/api/admin/users/999", headers=auth_headers(admin)).status_code == 404


def test_update_role_and_assignments(client, make_user, auth_headers, db):
    admin = make_user("admin")
    member = make_user("member")
    trainer = make_user("trainer")
    other_trainer = make_user("trainer")
    nutritionist = make_user("nutritionist")
    headers = auth_headers(admin)

    resp = client.put(f"/api/admin/users/{member.id}", json={
        "trainerId": trainer.id, "nutritionistId": nutritionist.id,
    }, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["trainerId"] == trainer.id
    assert resp.get_json()["nutritionistId"] == nutritionist.id

    # Reassigning replaces the single trainer row
    resp = client.put(f"/api/admin/users/{member.id}", json={"trainerId": other_trainer.id}, headers=headers)
    assert resp.get_json()["trainerId"] == other_trainer.id
    assert resp.get_json()["nutritionistId"] == nutritionist.id
    assert TrainerAssignment.query.filter_by(member_id=member.id).count() == 1

    resp = client.put(f"/api/admin/users/{member.id}", json={"nutritionistId": None}, headers=headers)
    assert resp.get_json()["nutritionistId"] is None

    resp = client.put(f"/api/admin/users/{trainer.id}", json={"role": "nutritionist"}, headers=headers)
    assert resp.get_json()["role"] == "nutritionist"


def test_assignment_must_reference_matching_role(client, make_user, auth_headers):
    admin = make_user("admin")
    member = make_user("member")
    not_a_trainer = make_user("nutritionist")
    resp = client.put(f"/api/admin/users/{member.id}", json={"trainerId": not_a_trainer.id},
                      headers=auth_headers(admin))
    assert resp.status_code == 400


def test_delete_user_cleans_up(client, make_user, auth_headers, assign, db):
    admin = make_user("admin")
    member = make_user("member")
    trainer = make_user("trainer")
    nutritionist = make_user("nutritionist")
    other_member = make_user("member")
    assign(member, trainer=trainer, nutritionist=nutritionist)
    assign(other_member, nutritionist=nutritionist)

    member_id, nutritionist_id, other_member_id = member.id, nutritionist.id, other_member.id
    member_headers = auth_headers(member)
    client.post("/api/meals", json={"member_id": member.id, "meal_type": "lunch", "calories": 500},
                headers=member_headers)
    client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "workout", "message": "hi"},
                headers=member_headers)
    client.post("/api/trainer/schedule", json={
        "member_id": member.id, "session_type": "online", "session_date": "2030-01-01", "session_time": "10:00",
    }, headers=auth_headers(trainer))
    client.post(f"/api/members/{other_member.id}/diet-plan/manual", json={"meals": []},
                headers=auth_headers(nutritionist))

    resp = client.delete(f"/api/admin/users/{member.id}", headers=auth_headers(admin))
    assert resp.status_code == 204
    db.session.expire_all()
    assert db.session.get(User, member_id) is None
    assert MealLog.query.filter_by(member_id=member_id).count() == 0
    assert Schedule.query.count() == 0
    assert TrainerAssignment.query.count() == 0

    # Deleting a coach detaches their plans instead of removing them
    assert client.delete(f"/api/admin/users/{nutritionist_id}", headers=auth_headers(admin)).status_code == 204
    db.session.expire_all()
    plan = DietPlan.query.filter_by(member_id=other_member_id).one()
    assert plan.nutritionist_id is None
    assert Notification.query.filter_by(user_id=nutritionist_id).count() == 0

    assert client.delete(f"/api/admin/users/{member_id}", headers=auth_headers(admin)).status_code == 404
