"""Per-actor cooldowns for mutating commands.

The ledger engine imposes no throughput limit of its own; callers use a
CooldownRegistry to stop one operator from spamming add/remove. A single
registry is built in CoreConfig.ready() and shared by reference.
"""

import math
import threading
import time
from typing import Callable


class CooldownRegistry:
	"""
	Tracks cooldown expiry per (user_id, command).

	Expired entries are evicted whenever they are looked at, and a user with
	no live cooldowns is dropped entirely, so the map only holds active windows.
	"""

	def __init__(self, duration: float = 3.0, clock: Callable[[], float] = time.monotonic):
		if duration < 0:
			raise ValueError("duration must be >= 0")
		self.duration = float(duration)
		self._clock = clock
		self._lock = threading.Lock()
		self._expiry: dict[str, dict[str, float]] = {}

	def remaining(self, user_id: str, command: str) -> int:
		"""
		Seconds (rounded up) before user_id may run command again; 0 if free.
		"""
		with self._lock:
			now = self._clock()
			self._evict(user_id, now)
			expires_at = self._expiry.get(user_id, {}).get(command)
			if expires_at is None:
				return 0
			return math.ceil(expires_at - now)

	def try_start(self, user_id: str, command: str) -> int:
		"""
		Check and claim the window in one step.

		Returns 0 if the window was free and is now held by the caller,
		otherwise the seconds (rounded up) still left. Callers that end up not
		running the command give the window back with cancel().
		"""
		with self._lock:
			now = self._clock()
			self._evict(user_id, now)
			expires_at = self._expiry.get(user_id, {}).get(command)
			if expires_at is not None:
				return math.ceil(expires_at - now)
			if self.duration > 0:
				self._expiry.setdefault(user_id, {})[command] = now + self.duration
			return 0

	def cancel(self, user_id: str, command: str) -> None:
		with self._lock:
			commands = self._expiry.get(user_id)
			if commands is None:
				return
			commands.pop(command, None)
			if not commands:
				del self._expiry[user_id]

	def clear(self) -> None:
		with self._lock:
			self._expiry.clear()

	def active_users(self) -> int:
		with self._lock:
			return len(self._expiry)

	def _evict(self, user_id: str, now: float) -> None:
		commands = self._expiry.get(user_id)
		if commands is None:
			return
		for command in [c for c, expires_at in commands.items() if expires_at <= now]:
			del commands[command]
		if not commands:
			del self._expiry[user_id]
