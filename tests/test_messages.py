from fitcoach.models import Notification, NutritionistFeedback, TrainerFeedback


def test_member_message_notifies_coach_and_admins(client, make_user, auth_headers, assign):
    member = make_user("member")
    nutritionist = make_user("nutritionist")
    admin = make_user("admin")
    assign(member, nutritionist=nutritionist)

    resp = client.post(f"/api/members/{member.id}/plan-messages", json={
        "planType": "Diet", "message": "  Can I swap rice for quinoa?  ",
    }, headers=auth_headers(member))
    assert resp.status_code == 201
    message = resp.get_json()["message"]
    assert message["plan_type"] == "diet"
    assert message["sender_role"] == "member"
    assert message["coach_id"] is None
    assert message["message"] == "Can I swap rice for quinoa?"

    coach_note = Notification.query.filter_by(user_id=nutritionist.id).one()
    assert coach_note.message == "New message from member about their diet plan"
    admin_note = Notification.query.filter_by(user_id=admin.id).one()
    assert admin_note.message == f"New diet plan message for member #{member.id}"
    assert Notification.query.filter_by(user_id=member.id).count() == 0


def test_coach_reply_notifies_member(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)

    resp = client.post(f"/api/members/{member.id}/plan-messages", json={
        "planType": "workout", "message": "Add a rest day",
    }, headers=auth_headers(trainer))
    assert resp.status_code == 201
    assert resp.get_json()["message"]["coach_id"] == trainer.id
    assert Notification.query.filter_by(user_id=member.id).one().message == "New message about your workout plan"


def test_trainer_cannot_post_diet_messages(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)
    resp = client.post(f"/api/members/{member.id}/plan-messages", json={
        "planType": "diet", "message": "Eat more",
    }, headers=auth_headers(trainer))
    assert resp.status_code == 403
    assert resp.get_json()["msg"] == "Trainers can only post to workout plan messages"


def test_unassigned_coach_is_forbidden(client, make_user, auth_headers):
    member = make_user("member")
    trainer = make_user("trainer")
    resp = client.post(f"/api/members/{member.id}/plan-messages", json={
        "planType": "workout", "message": "Hello",
    }, headers=auth_headers(trainer))
    assert resp.status_code == 403


def test_list_messages(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)
    for text in ("first", "second"):
        client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "workout", "message": text},
                    headers=auth_headers(member))
    client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "diet", "message": "other"},
                headers=auth_headers(member))

    resp = client.get(f"/api/members/{member.id}/plan-messages?planType=workout", headers=auth_headers(trainer))
    assert [m["message"] for m in resp.get_json()["messages"]] == ["first", "second"]

    resp = client.get(f"/api/members/{member.id}/plan-messages", headers=auth_headers(member))
    assert resp.status_code == 400


def test_empty_message_rejected(client, make_user, auth_headers):
    member = make_user("member")
    resp = client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "diet", "message": "   "},
                       headers=auth_headers(member))
    assert resp.status_code == 400


def test_notification_failure_does_not_fail_the_post(client, make_user, auth_headers, assign, monkeypatch):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)

    def boom(*args, **kwargs):
        raise RuntimeError("socket down")

    monkeypatch.setattr("fitcoach.routes.members.messages.notify_admins", boom)
    resp = client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "workout", "message": "hi"},
                       headers=auth_headers(member))
    assert resp.status_code == 201


def test_notifications_listing_and_read(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)
    for _ in range(2):
        client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "workout", "message": "note"},
                    headers=auth_headers(trainer))

    headers = auth_headers(member)
    notes = client.get("/api/notifications", headers=headers).get_json()["notifications"]
    assert len(notes) == 2
    assert client.post(f"/api/notifications/{notes[0]['id']}/read", headers=headers).get_json() == {"ok": True}

    unread = client.get("/api/notifications?only_unread=true", headers=headers).get_json()["notifications"]
    assert [n["id"] for n in unread] == [notes[1]["id"]]

    # Another user's notification cannot be marked
    client.post(f"/api/notifications/{notes[1]['id']}/read", headers=auth_headers(trainer))
    assert len(client.get("/api/notifications?only_unread=1", headers=headers).get_json()["notifications"]) == 1


def test_feedback_endpoints(client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    nutritionist = make_user("nutritionist")
    assign(member, trainer=trainer, nutritionist=nutritionist)

    resp = client.post(f"/api/members/{member.id}/trainer-feedback", json={"message": "Great squats"},
                       headers=auth_headers(trainer))
    assert resp.status_code == 201
    assert TrainerFeedback.query.one().content == "Great squats"

    resp = client.post(f"/api/members/{member.id}/nutritionist-feedback", json={"message": "More fibre"},
                       headers=auth_headers(nutritionist))
    assert resp.status_code == 201
    assert NutritionistFeedback.query.one().nutritionist_id == nutritionist.id

    resp = client.post(f"/api/members/{member.id}/trainer-feedback", json={"message": "x"},
                       headers=auth_headers(nutritionist))
    assert resp.status_code == 403
    resp = client.post(f"/api/members/{member.id}/trainer-feedback", json={"message": "x"},
                       headers=auth_headers(member))
    assert resp.status_code == 403
