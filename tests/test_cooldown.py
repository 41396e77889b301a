"""
Tests for the per-actor cooldown registry (injected clock, no sleeping).
"""
import threading

import pytest
from django.apps import apps

from core.cooldown import CooldownRegistry


class FakeClock:
	def __init__(self, now=1000.0):
		self.now = now

	def __call__(self):
		return self.now

	def advance(self, seconds):
		self.now += seconds


@pytest.fixture
def clock():
	return FakeClock()


@pytest.fixture
def registry(clock):
	return CooldownRegistry(duration=3, clock=clock)


class TestCooldownRegistry:

	def test_free_until_started(self, registry):
		assert registry.remaining("u1", "points_add") == 0

	def test_remaining_rounds_up(self, registry, clock):
		registry.try_start("u1", "points_add")
		assert registry.remaining("u1", "points_add") == 3

		clock.advance(0.5)
		assert registry.remaining("u1", "points_add") == 3

		clock.advance(1.6)
		assert registry.remaining("u1", "points_add") == 1

	def test_expires_and_is_evicted(self, registry, clock):
		registry.try_start("u1", "points_add")
		clock.advance(3)

		assert registry.remaining("u1", "points_add") == 0
		assert registry.active_users() == 0

	def test_commands_are_tracked_separately(self, registry, clock):
		registry.try_start("u1", "points_add")
		clock.advance(1)
		registry.try_start("u1", "points_remove")

		assert registry.remaining("u1", "points_add") == 2
		assert registry.remaining("u1", "points_remove") == 3

		clock.advance(2)
		assert registry.remaining("u1", "points_add") == 0
		assert registry.remaining("u1", "points_remove") == 1
		assert registry.active_users() == 1

	def test_users_are_tracked_separately(self, registry):
		registry.try_start("u1", "points_add")
		assert registry.remaining("u2", "points_add") == 0

	def test_clear(self, registry):
		registry.try_start("u1", "points_add")
		registry.try_start("u2", "points_add")
		registry.clear()

		assert registry.active_users() == 0
		assert registry.remaining("u1", "points_add") == 0

	def test_zero_duration_never_blocks(self, clock):
		registry = CooldownRegistry(duration=0, clock=clock)
		registry.try_start("u1", "points_add")
		assert registry.remaining("u1", "points_add") == 0

	def test_negative_duration_rejected(self):
		with pytest.raises(ValueError):
			CooldownRegistry(duration=-1)

	def test_single_registry_per_process(self):
		config = apps.get_app_config("core")
		assert isinstance(config.cooldowns, CooldownRegistry)
		assert apps.get_app_config("core").cooldowns is config.cooldowns


class TestTryStart:

	def test_first_call_claims_the_window(self, registry):
		assert registry.try_start("u1", "points_add") == 0
		assert registry.try_start("u1", "points_add") == 3
		assert registry.remaining("u1", "points_add") == 3

	def test_cancel_releases_the_window(self, registry):
		registry.try_start("u1", "points_add")
		registry.try_start("u1", "points_remove")

		registry.cancel("u1", "points_add")
		assert registry.remaining("u1", "points_add") == 0
		assert registry.remaining("u1", "points_remove") == 3

		registry.cancel("u1", "points_remove")
		assert registry.active_users() == 0

	def test_cancel_unknown_is_noop(self, registry):
		registry.cancel("nobody", "points_add")
		assert registry.active_users() == 0

	def test_zero_duration_never_claims(self, clock):
		registry = CooldownRegistry(duration=0, clock=clock)
		assert registry.try_start("u1", "points_add") == 0
		assert registry.try_start("u1", "points_add") == 0
		assert registry.active_users() == 0

	def test_only_one_thread_wins(self, registry):
		count = 20
		barrier = threading.Barrier(count)
		results = []

		def worker():
			barrier.wait()
			results.append(registry.try_start("u1", "points_add"))

		threads = [threading.Thread(target=worker) for _ in range(count)]
		for t in threads:
			t.start()
		for t in threads:
			t.join()

		assert results.count(0) == 1
		assert len(results) == count
