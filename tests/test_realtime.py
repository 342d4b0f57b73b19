from flask_jwt_extended import create_access_token

from fitcoach.extensions import socketio


def token_for(user):
    return create_access_token(identity=str(user.id), additional_claims={"role": user.role})


def test_socket_requires_valid_token(app):
    anonymous = socketio.test_client(app)
    assert not anonymous.is_connected()

    forged = socketio.test_client(app, auth={"token": "not-a-jwt"})
    assert not forged.is_connected()


def test_notifications_are_pushed_to_user_room(app, client, make_user, auth_headers, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    assign(member, trainer=trainer)

    member_socket = socketio.test_client(app, auth={"token": token_for(member)})
    trainer_socket = socketio.test_client(app, auth={"token": token_for(trainer)})
    assert member_socket.is_connected()

    client.post(f"/api/members/{member.id}/plan-messages", json={"planType": "workout", "message": "Deload week"},
                headers=auth_headers(trainer))

    received = [event for event in member_socket.get_received() if event["name"] == "notification"]
    assert len(received) == 1
    assert received[0]["args"][0]["message"] == "New message about your workout plan"
    assert not [event for event in trainer_socket.get_received() if event["name"] == "notification"]


def test_socket_rejects_token_of_deleted_user(app, make_user, db):
    member = make_user("member")
    token = token_for(member)
    db.session.delete(member)
    db.session.commit()

    stale = socketio.test_client(app, auth={"token": token})
    assert not stale.is_connected()
