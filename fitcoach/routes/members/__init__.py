from flask import Blueprint

members_bp = Blueprint("members", __name__)

from . import profile, progress, check_ins, schedule, plans, messages
