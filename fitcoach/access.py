"""Role checks and the member access policy.

Every coach or admin read of member data goes through ``check_member_access``.
Assignments are looked up on each call; nothing is cached between requests.
"""
from enum import Enum
from functools import wraps
from typing import Callable, NamedTuple, Tuple

from flask import jsonify
from flask_jwt_extended import current_user, jwt_required

from fitcoach.models import NutritionistAssignment, TrainerAssignment


class Role(str, Enum):
    ADMIN = "admin"
    TRAINER = "trainer"
    NUTRITIONIST = "nutritionist"
    MEMBER = "member"


class Discipline(str, Enum):
    DIET = "diet"
    WORKOUT = "workout"
    GENERAL = "general"


class AccessPolicy(NamedTuple):
    discipline: Discipline
    roles: Tuple[Role, ...]


_ALL = (Role.ADMIN, Role.TRAINER, Role.NUTRITIONIST, Role.MEMBER)

POLICIES = {
    "profile": AccessPolicy(Discipline.GENERAL, _ALL),
    "logs": AccessPolicy(Discipline.GENERAL, _ALL),
    "progress": AccessPolicy(Discipline.GENERAL, _ALL),
    "schedule": AccessPolicy(Discipline.GENERAL, _ALL),
    "check_ins": AccessPolicy(Discipline.GENERAL, _ALL),
    "plan_messages": AccessPolicy(Discipline.GENERAL, _ALL),
    "diet_plan": AccessPolicy(Discipline.DIET, _ALL),
    "diet_plan.generate": AccessPolicy(Discipline.DIET, (Role.ADMIN, Role.NUTRITIONIST, Role.MEMBER)),
    "diet_plan.manual": AccessPolicy(Discipline.DIET, (Role.ADMIN, Role.NUTRITIONIST)),
    "workout_plan": AccessPolicy(Discipline.WORKOUT, _ALL),
    "workout_plan.generate": AccessPolicy(Discipline.WORKOUT, (Role.ADMIN, Role.TRAINER, Role.MEMBER)),
    "workout_plan.manual": AccessPolicy(Discipline.WORKOUT, (Role.ADMIN, Role.TRAINER)),
    "trainer_feedback": AccessPolicy(Discipline.WORKOUT, (Role.ADMIN, Role.TRAINER)),
    "nutritionist_feedback": AccessPolicy(Discipline.DIET, (Role.ADMIN, Role.NUTRITIONIST)),
}


def _as_role(role):
    try:
        return Role(role)
    except ValueError:
        return None


def evaluate_access(role, requester_id: int, member_id: int, discipline,
                    is_assigned: Callable[[Role, int, int], bool]) -> bool:
    """Pure access predicate.

    ``is_assigned(role, coach_id, member_id)`` is only consulted for coach
    roles whose discipline matches the request.
    """
    role = _as_role(role)
    discipline = Discipline(discipline)
    if role is None:
        return False
    if role is Role.ADMIN:
        return True
    if role is Role.MEMBER:
        return requester_id == member_id
    if role is Role.TRAINER and discipline in (Discipline.WORKOUT, Discipline.GENERAL):
        return bool(is_assigned(role, requester_id, member_id))
    if role is Role.NUTRITIONIST and discipline in (Discipline.DIET, Discipline.GENERAL):
        return bool(is_assigned(role, requester_id, member_id))
    return False


def is_assigned(role, coach_id, member_id):
    role = _as_role(role)
    if role is Role.TRAINER:
        row = TrainerAssignment.query.filter_by(trainer_id=coach_id, member_id=member_id).first()
    elif role is Role.NUTRITIONIST:
        row = NutritionistAssignment.query.filter_by(nutritionist_id=coach_id, member_id=member_id).first()
    else:
        return False
    return row is not None


def check_member_access(user, member_id, resource):
    policy = POLICIES[resource]
    role = _as_role(user.role)
    if role not in policy.roles:
        return False
    return evaluate_access(role, user.id, member_id, policy.discipline, is_assigned)


def roles_required(*roles):
    allowed = {Role(r).value for r in roles}

    def decorator(fn):
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            if current_user.role not in allowed:
                return jsonify({"msg": "Forbidden"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def member_access_required(resource):
    """Guard a view taking a ``member_id`` argument with the named policy."""
    if resource not in POLICIES:
        raise KeyError(resource)

    def decorator(fn):
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            member_id = kwargs.get("member_id")
            if not isinstance(member_id, int) or member_id <= 0:
                return jsonify({"msg": "Invalid member id"}), 400
            if not check_member_access(current_user, member_id, resource):
                return jsonify({"msg": "Forbidden"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
