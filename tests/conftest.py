"""
Pytest configuration for the ledger tests.
"""
import pytest
from django.apps import apps

from core.policy import PointsPolicy

# Snowflake-sized ids: larger than 2**53, so any float conversion would corrupt them
SUPER_ADMIN_ID = "1306580945419370621"
MANAGER_ID = "1232261529752178719"
STAFF_ID = "1450450293547339808"
OTHER_STAFF_ID = "1450450293547339809"


@pytest.fixture(autouse=True)
def reset_cooldowns():
	registry = apps.get_app_config("core").cooldowns
	registry.clear()
	yield
	registry.clear()


@pytest.fixture
def policy():
	return PointsPolicy(allow_negative_balance=False, allow_self_action=False, min_amount=1, max_amount=10000)


@pytest.fixture
def permissive_policy():
	return PointsPolicy(allow_negative_balance=True, allow_self_action=True, min_amount=1, max_amount=10000)


@pytest.fixture
def staff_settings(settings):
	settings.POINT_MANAGERS = [MANAGER_ID]
	settings.SUPER_ADMINS = [SUPER_ADMIN_ID]
	settings.POINTS_ALLOW_NEGATIVE_BALANCE = False
	settings.POINTS_ALLOW_SELF_ACTION = False
	settings.POINTS_MIN_AMOUNT = 1
	settings.POINTS_MAX_AMOUNT = 10000
	return settings
