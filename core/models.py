"""Database models for the points ledger.


Tables:
- StaffPoints: current balance per user identity (lazily created on first mutation)
- ActionType
- PointsHistory: append-only audit trail, one row per committed mutation

User identities are opaque strings end to end; chat-platform snowflakes do not
fit a double and must never be coerced to a number.
"""

from django.db import models
from django.utils import timezone

from .exceptions import HistoryImmutable


IDENTITY_MAX_LENGTH = 64


class StaffPoints(models.Model):
	"""
	Current balance for one user. Only core.services.modify_points writes here.
	"""
	user_id = models.CharField(primary_key=True, max_length=IDENTITY_MAX_LENGTH)
	points = models.BigIntegerField(default=0)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		db_table = "staff_points"
		verbose_name_plural = "staff points"

	def __str__(self):
		return f"{self.user_id}: {self.points}"


class ActionType(models.TextChoices):
	ADD = "ADD", "Add"
	REMOVE = "REMOVE", "Remove"


class PointsHistoryQuerySet(models.QuerySet):
	"""
	Bulk update/delete would bypass the audit trail; refuse them.
	"""

	def update(self, **kwargs):
		raise HistoryImmutable("points history rows cannot be updated")

	def delete(self):
		raise HistoryImmutable("points history rows cannot be deleted")


class PointsHistory(models.Model):
	"""
	Immutable record of one balance mutation.

	after_points == before_points + amount (ADD) or before_points - amount (REMOVE);
	the newest row per target always matches StaffPoints.points.
	"""
	id = models.BigAutoField(primary_key=True)
	target_user_id = models.CharField(max_length=IDENTITY_MAX_LENGTH)
	action_by_user_id = models.CharField(max_length=IDENTITY_MAX_LENGTH)
	action_type = models.CharField(max_length=6, choices=ActionType.choices)
	amount = models.BigIntegerField()
	before_points = models.BigIntegerField()
	after_points = models.BigIntegerField()
	reason = models.TextField(null=True, blank=True)
	created_at = models.DateTimeField(default=timezone.now)

	objects = PointsHistoryQuerySet.as_manager()

	class Meta:
		db_table = "points_history"
		verbose_name_plural = "points history"
		indexes = [
			models.Index(fields=["target_user_id", "-created_at"], name="points_hist_target_created"),
		]
		constraints = [
			models.CheckConstraint(condition=models.Q(amount__gt=0), name="points_hist_amount_positive"),
			models.CheckConstraint(
				condition=(
					models.Q(action_type=ActionType.ADD, after_points=models.F("before_points") + models.F("amount"))
					| models.Q(action_type=ActionType.REMOVE, after_points=models.F("before_points") - models.F("amount"))
				),
				name="points_hist_conservation",
			),
		]

	def __str__(self):
		sign = "+" if self.action_type == ActionType.ADD else "-"
		return f"{self.target_user_id} {sign}{self.amount} -> {self.after_points}"

	@property
	def signed_amount(self) -> int:
		return self.amount if self.action_type == ActionType.ADD else -self.amount

	def save(self, *args, **kwargs):
		if not self._state.adding:
			raise HistoryImmutable("points history rows cannot be updated")
		super().save(*args, **kwargs)

	def delete(self, *args, **kwargs):
		raise HistoryImmutable("points history rows cannot be deleted")
