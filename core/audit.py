"""Audit log receiver for committed point mutations.

Logs only who, whom, how much and when. Balances stay in the database (the
source of truth) and reasons stay out of the log for privacy.
"""

import logging

from django.conf import settings

from .models import ActionType

audit_logger = logging.getLogger("staffpoints.audit")


def format_audit_line(action_type, target_user_id, amount, actor_user_id, timestamp) -> str:
	if action_type == ActionType.ADD:
		verb, sign = "ADDED", "+"
	else:
		verb, sign = "REMOVED", "-"
	return f"POINTS {verb} user={target_user_id} amount={sign}{amount} by={actor_user_id} time={timestamp.isoformat()}"


def log_points_modified(sender, *, action_type, target_user_id, amount, actor_user_id, timestamp, **kwargs):
	if not getattr(settings, "AUDIT_LOG_ENABLED", True):
		return
	audit_logger.info(format_audit_line(action_type, target_user_id, amount, actor_user_id, timestamp))
