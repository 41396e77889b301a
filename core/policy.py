"""Points policy shared by the engine, the permission checks and the API.


- allow_negative_balance is the one global negative-balance switch
- min_amount / max_amount bound every single mutation
- allow_self_action applies to both ADD and REMOVE
"""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class PointsPolicy:
	allow_negative_balance: bool = False
	allow_self_action: bool = False
	min_amount: int = 1
	max_amount: int = 10000

	@classmethod
	def from_settings(cls) -> "PointsPolicy":
		"""
		Read the policy from Django settings. Called once per request so that
		a settings override is picked up without restarting.
		"""
		return cls(
			allow_negative_balance=bool(getattr(settings, "POINTS_ALLOW_NEGATIVE_BALANCE", False)),
			allow_self_action=bool(getattr(settings, "POINTS_ALLOW_SELF_ACTION", False)),
			min_amount=int(getattr(settings, "POINTS_MIN_AMOUNT", 1)),
			max_amount=int(getattr(settings, "POINTS_MAX_AMOUNT", 10000)),
		)

	def amount_in_bounds(self, amount: int) -> bool:
		return self.min_amount <= amount <= self.max_amount
