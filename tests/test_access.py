import pytest

from fitcoach.access import Discipline, Role, check_member_access, evaluate_access


def assigned_to(*pairs):
    links = set(pairs)

    def _is_assigned(role, coach_id, member_id):
        return (role, coach_id, member_id) in links

    return _is_assigned


NOBODY = assigned_to()


def test_member_only_sees_self():
    assert evaluate_access(Role.MEMBER, 5, 5, Discipline.GENERAL, NOBODY)
    assert not evaluate_access(Role.MEMBER, 5, 6, Discipline.GENERAL, NOBODY)


@pytest.mark.parametrize("discipline", list(Discipline))
def test_admin_always_allowed(discipline):
    assert evaluate_access(Role.ADMIN, 1, 99, discipline, NOBODY)


def test_trainer_needs_assignment_for_workout_and_general():
    linked = assigned_to((Role.TRAINER, 2, 10))
    assert evaluate_access(Role.TRAINER, 2, 10, Discipline.WORKOUT, linked)
    assert evaluate_access(Role.TRAINER, 2, 10, Discipline.GENERAL, linked)
    assert not evaluate_access(Role.TRAINER, 2, 10, Discipline.DIET, linked)
    assert not evaluate_access(Role.TRAINER, 2, 11, Discipline.WORKOUT, linked)


def test_nutritionist_needs_assignment_for_diet_and_general():
    linked = assigned_to((Role.NUTRITIONIST, 3, 10))
    assert evaluate_access(Role.NUTRITIONIST, 3, 10, Discipline.DIET, linked)
    assert evaluate_access(Role.NUTRITIONIST, 3, 10, Discipline.GENERAL, linked)
    assert not evaluate_access(Role.NUTRITIONIST, 3, 10, Discipline.WORKOUT, linked)


def test_unknown_role_is_denied():
    assert not evaluate_access("coach", 1, 1, Discipline.GENERAL, NOBODY)


def test_assignment_is_not_consulted_for_other_disciplines():
    calls = []

    def spy(role, coach_id, member_id):
        calls.append((role, coach_id, member_id))
        return True

    assert not evaluate_access(Role.TRAINER, 2, 10, Discipline.DIET, spy)
    assert calls == []


def test_check_member_access_reads_assignments(make_user, assign):
    member = make_user("member")
    trainer = make_user("trainer")
    other_trainer = make_user("trainer")
    nutritionist = make_user("nutritionist")
    assign(member, trainer=trainer, nutritionist=nutritionist)

    assert check_member_access(trainer, member.id, "workout_plan")
    assert not check_member_access(other_trainer, member.id, "workout_plan")
    assert not check_member_access(trainer, member.id, "diet_plan")
    assert check_member_access(nutritionist, member.id, "diet_plan.manual")
    # Policy role lists narrow further than the predicate
    assert not check_member_access(member, member.id, "diet_plan.manual")
    assert check_member_access(member, member.id, "diet_plan.generate")


def test_decorator_rejects_missing_token(client):
    resp = client.get("/api/members/1/profile")
    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Unauthorized"}


def test_decorator_forbids_other_members(client, make_user, auth_headers):
    member = make_user("member")
    other = make_user("member")
    resp = client.get(f"/api/members/{other.id}/profile", headers=auth_headers(member))
    assert resp.status_code == 403
    assert resp.get_json() == {"msg": "Forbidden"}


def test_invalid_member_id_is_rejected(client, make_user, auth_headers):
    admin = make_user("admin")
    resp = client.get("/api/members/0/profile", headers=auth_headers(admin))
    assert resp.status_code == 400


@pytest.mark.parametrize("role", ["trainer", "nutritionist"])
def test_unassigned_coach_cannot_read_profile(client, make_user, auth_headers, role):
    coach = make_user(role)
    member = make_user("member")
    headers = auth_headers(coach)

    existing = client.get(f"/api/members/{member.id}/profile", headers=headers)
    missing = client.get(f"/api/members/{member.id + 1000}/profile", headers=headers)
    assert existing.status_code == missing.status_code == 403
    assert existing.get_json() == missing.get_json() == {"msg": "Forbidden"}


def test_assigned_trainer_can_read_profile(client, make_user, auth_headers, assign):
    trainer = make_user("trainer")
    member = make_user("member")
    assign(member, trainer=trainer)
    resp = client.get(f"/api/members/{member.id}/profile", headers=auth_headers(trainer))
    assert resp.status_code == 200
