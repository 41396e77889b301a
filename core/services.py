"""Ledger engine: the only write path for point balances.

This module coordinates: lock balance row → validate against policy → write
balance → append history, as one @transaction.atomic unit. Reads (balance,
history, consistency summary) never take locks.
"""
import logging
from dataclasses import dataclass
from functools import partial

from django.db import Error, transaction
from django.db.models import F, Q
from django.utils import timezone

from .exceptions import InvalidActionType, InvalidAmount, InvalidIdentity, InsufficientBalance, StorageUnavailable
from .models import IDENTITY_MAX_LENGTH, ActionType, StaffPoints, PointsHistory
from .policy import PointsPolicy
from .signals import points_modified

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointsChange:
	before: int
	after: int
	entry: PointsHistory


def normalize_identity(user_id) -> str:
	"""
	Identities must arrive as strings. Integers are rejected rather than
	converted: a snowflake that already passed through a float is corrupt.
	"""
	if not isinstance(user_id, str):
		raise InvalidIdentity(f"user id must be a string, got {type(user_id).__name__}")
	user_id = user_id.strip()
	if not user_id or len(user_id) > IDENTITY_MAX_LENGTH:
		raise InvalidIdentity("user id must be 1-64 characters")
	return user_id


def validate_amount(amount, policy: PointsPolicy) -> int:
	# bool is an int subclass; True must not mean 1 point
	if isinstance(amount, bool) or not isinstance(amount, int):
		raise InvalidAmount("amount must be an integer")
	if amount <= 0:
		raise InvalidAmount("amount must be positive")
	if not policy.amount_in_bounds(amount):
		raise InvalidAmount(f"amount must be between {policy.min_amount} and {policy.max_amount}")
	return amount


def modify_points(target_user_id: str, actor_user_id: str, action_type, amount: int, *,
		allow_negative: bool, reason: str | None = None, policy: PointsPolicy | None = None) -> PointsChange:
	"""
	Atomically apply one ADD/REMOVE to target_user_id and append its history row.

	allow_negative is enforced under the row lock, so check and write cannot
	be separated by a concurrent mutation. Any failure leaves both the balance
	and the history exactly as they were.
	"""
	policy = policy or PointsPolicy.from_settings()
	target_user_id = normalize_identity(target_user_id)
	actor_user_id = normalize_identity(actor_user_id)
	try:
		action_type = ActionType(action_type)
	except ValueError as e:
		raise InvalidActionType(f"unknown action type {action_type!r}") from e
	amount = validate_amount(amount, policy)
	reason = (str(reason).strip() or None) if reason is not None else None

	try:
		with transaction.atomic():
			change = _apply_locked(target_user_id, actor_user_id, action_type, amount, allow_negative, reason)
			transaction.on_commit(partial(
				emit_points_modified,
				action_type=action_type,
				target_user_id=target_user_id,
				amount=amount,
				actor_user_id=actor_user_id,
				timestamp=change.entry.created_at,
			))
	except Error as e:
		logger.exception("modify_points failed for target=%s action=%s", target_user_id, action_type)
		raise StorageUnavailable("points store unavailable; nothing was changed") from e

	logger.debug("modify_points %s %s %s: %s -> %s", action_type, target_user_id, amount, change.before, change.after)
	return change


def _apply_locked(target_user_id, actor_user_id, action_type, amount, allow_negative, reason) -> PointsChange:
	# Lock (and lazily create) the balance row for the rest of the transaction
	balance, _ = StaffPoints.objects.select_for_update().get_or_create(user_id=target_user_id, defaults={"points": 0})

	before = balance.points
	after = before + amount if action_type == ActionType.ADD else before - amount

	if action_type == ActionType.REMOVE and not allow_negative and after < 0:
		raise InsufficientBalance(
			f"cannot remove {amount} points: balance is {before}",
			balance=before,
			amount=amount,
		)

	balance.points = after
	balance.save(update_fields=["points", "updated_at"])

	# created_at never goes backwards for a user, even if the clock does
	created_at = timezone.now()
	latest = (
		PointsHistory.objects.filter(target_user_id=target_user_id)
		.order_by("-created_at", "-id")
		.values_list("created_at", flat=True)
		.first()
	)
	if latest is not None and latest > created_at:
		created_at = latest

	entry = PointsHistory.objects.create(
		target_user_id=target_user_id,
		action_by_user_id=actor_user_id,
		action_type=action_type,
		amount=amount,
		before_points=before,
		after_points=after,
		reason=reason,
		created_at=created_at,
	)
	return PointsChange(before=before, after=after, entry=entry)


def add_points(target_user_id: str, actor_user_id: str, amount: int, reason: str | None = None,
		policy: PointsPolicy | None = None) -> PointsChange:
	policy = policy or PointsPolicy.from_settings()
	return modify_points(
		target_user_id, actor_user_id, ActionType.ADD, amount,
		allow_negative=policy.allow_negative_balance, reason=reason, policy=policy,
	)


def remove_points(target_user_id: str, actor_user_id: str, amount: int, reason: str | None = None,
		policy: PointsPolicy | None = None) -> PointsChange:
	"""
	REMOVE using the configured allow_negative_balance as the single source of truth.
	"""
	policy = policy or PointsPolicy.from_settings()
	return modify_points(
		target_user_id, actor_user_id, ActionType.REMOVE, amount,
		allow_negative=policy.allow_negative_balance, reason=reason, policy=policy,
	)


def emit_points_modified(**payload):
	"""
	Fire-and-forget audit hook. Receiver errors are logged, never raised.
	"""
	for receiver, response in points_modified.send_robust(sender=PointsHistory, **payload):
		if isinstance(response, Exception):
			logger.warning("points_modified receiver %r failed: %s", receiver, response)


def get_balance(user_id: str) -> int:
	"""
	Current balance, 0 for unknown users. Not a basis for write decisions:
	modify_points re-reads under lock.
	"""
	user_id = normalize_identity(user_id)
	try:
		points = StaffPoints.objects.filter(user_id=user_id).values_list("points", flat=True).first()
	except Error as e:
		logger.exception("get_balance failed for %s", user_id)
		raise StorageUnavailable("points store unavailable") from e
	return points or 0


def get_history(user_id: str) -> list[PointsHistory]:
	"""
	Committed history for user_id, newest first. Empty list when there is none.
	"""
	user_id = normalize_identity(user_id)
	try:
		return list(PointsHistory.objects.filter(target_user_id=user_id).order_by("-created_at", "-id"))
	except Error as e:
		logger.exception("get_history failed for %s", user_id)
		raise StorageUnavailable("points store unavailable") from e


def ledger_summary() -> dict:
	"""
	Recompute the ledger invariants across all users.

	- reconstruction: every balance equals its newest history row's after_points
	- conservation: every history row satisfies after - before == ±amount
	"""
	try:
		balances = dict(StaffPoints.objects.values_list("user_id", "points"))
		latest_after = {}
		for target, after in (
			PointsHistory.objects.order_by("target_user_id", "-created_at", "-id")
			.values_list("target_user_id", "after_points")
		):
			latest_after.setdefault(target, after)

		history_rows = PointsHistory.objects.count()
		broken_rows = PointsHistory.objects.exclude(
			Q(action_type=ActionType.ADD, after_points=F("before_points") + F("amount"))
			| Q(action_type=ActionType.REMOVE, after_points=F("before_points") - F("amount"))
		).count()
	except Error as e:
		logger.exception("ledger_summary failed")
		raise StorageUnavailable("points store unavailable") from e

	mismatched = sorted(
		user_id
		for user_id in set(balances) | set(latest_after)
		if balances.get(user_id, 0) != latest_after.get(user_id, 0)
	)
	return {
		"users": len(balances),
		"history_rows": history_rows,
		"total_points": sum(balances.values()),
		"mismatched_users": mismatched,
		"nonconserving_rows": broken_rows,
		"ok": not mismatched and broken_rows == 0,
	}
