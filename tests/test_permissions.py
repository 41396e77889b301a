"""
Tests for identity-based permission checks.
"""
from core.permissions import can_manage_points, can_view_history, is_point_manager, is_super_admin
from core.policy import PointsPolicy
from .conftest import MANAGER_ID, STAFF_ID, SUPER_ADMIN_ID, OTHER_STAFF_ID


class TestRoles:

	def test_super_admin_is_also_manager(self, staff_settings):
		assert is_super_admin(SUPER_ADMIN_ID)
		assert is_point_manager(SUPER_ADMIN_ID)

	def test_manager_is_not_super_admin(self, staff_settings):
		assert is_point_manager(MANAGER_ID)
		assert not is_super_admin(MANAGER_ID)

	def test_plain_staff(self, staff_settings):
		assert not is_point_manager(STAFF_ID)

	def test_ids_compared_as_exact_strings(self, staff_settings):
		# off by one in the last digit: equal once squeezed through a double
		assert not is_point_manager("1232261529752178720")


class TestCanManagePoints:

	def test_manager_can_manage_others(self, staff_settings, policy):
		assert can_manage_points(MANAGER_ID, STAFF_ID, policy)

	def test_staff_cannot_manage(self, staff_settings, policy):
		assert not can_manage_points(STAFF_ID, OTHER_STAFF_ID, policy)

	def test_self_action_blocked_for_everyone_by_default(self, staff_settings, policy):
		assert not can_manage_points(MANAGER_ID, MANAGER_ID, policy)
		assert not can_manage_points(SUPER_ADMIN_ID, SUPER_ADMIN_ID, policy)

	def test_self_action_flag_enables_self(self, staff_settings):
		policy = PointsPolicy(allow_self_action=True)
		assert can_manage_points(MANAGER_ID, MANAGER_ID, policy)
		# still requires being a manager
		assert not can_manage_points(STAFF_ID, STAFF_ID, policy)

	def test_reads_policy_from_settings(self, staff_settings):
		staff_settings.POINTS_ALLOW_SELF_ACTION = True
		assert can_manage_points(MANAGER_ID, MANAGER_ID)


class TestCanViewHistory:

	def test_own_history(self, staff_settings):
		assert can_view_history(STAFF_ID, STAFF_ID)

	def test_others_history_requires_manager(self, staff_settings):
		assert not can_view_history(STAFF_ID, OTHER_STAFF_ID)
		assert can_view_history(MANAGER_ID, STAFF_ID)
		assert can_view_history(SUPER_ADMIN_ID, STAFF_ID)
