"""Read-only endpoints: balance, history, statement download, consistency summary."""

from django.http import HttpResponse, JsonResponse
from django.utils import timezone

from core.exceptions import LedgerError, NotFound
from core.permissions import can_view_history, is_super_admin
from core.services import get_balance, get_history, ledger_summary, normalize_identity
from core.statement import render_statement, statement_filename
from .errors import error_response, ledger_error_response
from .views_ops import actor_from_request


def balance(request, user_id: str):
	"""
	GET: Current balance (0 for users who never had a transaction)
	"""
	try:
		points = get_balance(user_id)
	except LedgerError as e:
		return ledger_error_response(e)
	return JsonResponse({"user_id": user_id, "points": points})


def _history_for_viewer(request, user_id: str):
	actor_id = actor_from_request(request)
	target_id = normalize_identity(user_id)
	if not can_view_history(actor_id, target_id):
		return target_id, None
	return target_id, get_history(target_id)


def history(request, user_id: str):
	"""
	GET: Full history, newest first
	"""
	try:
		target_id, rows = _history_for_viewer(request, user_id)
	except LedgerError as e:
		return ledger_error_response(e)
	if rows is None:
		return error_response("permission_denied", "You do not have permission to view this user's history.", 403)

	data = [
		{
			"id": str(r.id),
			"target_user_id": r.target_user_id,
			"action_by_user_id": r.action_by_user_id,
			"action_type": r.action_type,
			"amount": r.amount,
			"before_points": r.before_points,
			"after_points": r.after_points,
			"reason": r.reason,
			"created_at": r.created_at.isoformat(),
		}
		for r in rows
	]
	return JsonResponse({"user_id": target_id, "entries": data})


def statement(request, user_id: str):
	"""
	GET: Plain-text statement attachment. ?label= sets the display name.
	"""
	try:
		target_id, rows = _history_for_viewer(request, user_id)
		if rows is None:
			return error_response("permission_denied", "You do not have permission to view this user's history.", 403)
		if not rows:
			raise NotFound("No points history found for this user.")
	except LedgerError as e:
		return ledger_error_response(e)

	label = request.GET.get("label") or target_id
	now = timezone.now()
	text = render_statement(label, rows, subject_id=target_id, generated_at=now)
	response = HttpResponse(text, content_type="text/plain; charset=utf-8")
	response["Content-Disposition"] = f'attachment; filename="{statement_filename(label, now)}"'
	return response


def debug_summary(request):
	"""
	GET: Recompute ledger invariants (super admins only)
	"""
	try:
		actor_id = actor_from_request(request)
	except LedgerError as e:
		return ledger_error_response(e)
	if not is_super_admin(actor_id):
		return error_response("permission_denied", "Super admins only.", 403)

	try:
		summary = ledger_summary()
	except LedgerError as e:
		return ledger_error_response(e)
	summary["notes"] = "each balance should equal the after_points of its newest history row."
	return JsonResponse(summary)
