"""Operational endpoints that mutate balances (add/remove)."""

import json
import logging

from django.apps import apps
from django.http import JsonResponse, HttpResponseBadRequest
from django.views.decorators.csrf import csrf_exempt

from core.exceptions import LedgerError
from core.models import ActionType
from core.permissions import can_manage_points, is_point_manager
from core.policy import PointsPolicy
from core.services import add_points, remove_points, normalize_identity
from .errors import error_response, ledger_error_response

logger = logging.getLogger(__name__)


def health(request):
	return JsonResponse({"ok": True})


def actor_from_request(request) -> str:
	"""
	Identity resolution is upstream (the chat bot); it forwards the caller's id as a header.
	"""
	return normalize_identity(request.headers.get("X-Actor-Id") or "")


@csrf_exempt
def add(request):
	"""
	POST: Credit points to target_user_id
	"""
	return _mutate(request, ActionType.ADD)


@csrf_exempt
def remove(request):
	"""
	POST: Debit points from target_user_id (negative balance per POINTS_ALLOW_NEGATIVE_BALANCE)
	"""
	return _mutate(request, ActionType.REMOVE)


def _mutate(request, action_type: ActionType):
	if request.method != "POST":
		return HttpResponseBadRequest("POST only")

	try:
		body = json.loads(request.body or b"{}")
	except ValueError:
		return HttpResponseBadRequest("Invalid JSON")
	if not isinstance(body, dict):
		return HttpResponseBadRequest("JSON object required")

	policy = PointsPolicy.from_settings()
	try:
		actor_id = actor_from_request(request)
		target_id = normalize_identity(body.get("target_user_id"))
	except LedgerError as e:
		return ledger_error_response(e)

	if not can_manage_points(actor_id, target_id, policy):
		if is_point_manager(actor_id):
			return error_response("self_action_not_allowed", "You cannot change your own points.", 403)
		return error_response("permission_denied", "You do not have permission to manage points.", 403)

	command = f"points_{action_type.value.lower()}"
	cooldowns = apps.get_app_config("core").cooldowns
	# Claimed before the mutation so concurrent requests from one actor cannot all pass
	remaining = cooldowns.try_start(actor_id, command)
	if remaining > 0:
		response = error_response("cooldown", f"Slow down! Wait {remaining}s before using this again.", 429, retry_after=remaining)
		response["Retry-After"] = str(remaining)
		return response

	mutate = add_points if action_type == ActionType.ADD else remove_points
	succeeded = False
	try:
		change = mutate(target_id, actor_id, body.get("amount"), body.get("reason"), policy=policy)
		succeeded = True
	except LedgerError as e:
		logger.info("%s rejected for target=%s by=%s: %s", command, target_id, actor_id, e.code)
		return ledger_error_response(e)
	finally:
		# A failed mutation does not cost the actor a cooldown
		if not succeeded:
			cooldowns.cancel(actor_id, command)

	entry = change.entry
	return JsonResponse({
		"history_id": str(entry.id),
		"target_user_id": target_id,
		"action_type": entry.action_type,
		"amount": entry.amount,
		"before": change.before,
		"after": change.after,
		"reason": entry.reason,
		"created_at": entry.created_at.isoformat(),
	}, status=201)
