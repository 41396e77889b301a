"""Map ledger error codes to HTTP responses without string matching."""

from django.http import JsonResponse

from core.exceptions import LedgerError

STATUS_BY_CODE = {
	"invalid_amount": 400,
	"invalid_identity": 400,
	"invalid_action_type": 400,
	"not_found": 404,
	"insufficient_balance": 409,
	"storage_unavailable": 503,
}


def error_response(code: str, message: str, status: int, **extra) -> JsonResponse:
	return JsonResponse({"error": code, "message": message, **extra}, status=status)


def ledger_error_response(e: LedgerError) -> JsonResponse:
	# storage details stay server-side
	message = "Points store is temporarily unavailable, try again" if e.code == "storage_unavailable" else e.message
	return error_response(e.code, message, STATUS_BY_CODE.get(e.code, 400))
