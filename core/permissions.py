"""Identity-based permission checks (no roles; ids come from settings)."""

from django.conf import settings

from .policy import PointsPolicy


def is_super_admin(user_id: str) -> bool:
	return user_id in getattr(settings, "SUPER_ADMINS", [])


def is_point_manager(user_id: str) -> bool:
	"""
	Point managers may add/remove points for others. Super admins count as managers.
	"""
	return user_id in getattr(settings, "POINT_MANAGERS", []) or is_super_admin(user_id)


def can_manage_points(actor_user_id: str, target_user_id: str, policy: PointsPolicy | None = None) -> bool:
	"""
	Whether actor may add or remove points on target.

	Acting on oneself is governed by the single allow_self_action flag for both
	directions, super admins included.
	"""
	policy = policy or PointsPolicy.from_settings()
	if not is_point_manager(actor_user_id):
		return False
	if actor_user_id == target_user_id:
		return policy.allow_self_action
	return True


def can_view_history(actor_user_id: str, target_user_id: str) -> bool:
	if actor_user_id == target_user_id:
		return True
	return is_point_manager(actor_user_id)
