"""Ledger error taxonomy.

Each error carries a stable ``code`` so callers (the API, a chat bot) can map
failures to user-facing text without parsing messages.
"""


class LedgerError(Exception):
	code = "ledger_error"

	def __init__(self, message: str | None = None):
		super().__init__(message or self.code)
		self.message = message or self.code


class InvalidAmount(LedgerError):
	"""Amount is not a positive integer inside the configured bounds."""
	code = "invalid_amount"


class InvalidIdentity(LedgerError):
	code = "invalid_identity"


class InsufficientBalance(LedgerError):
	"""A REMOVE would take the balance below zero while negatives are disallowed."""
	code = "insufficient_balance"

	def __init__(self, message: str | None = None, *, balance: int | None = None, amount: int | None = None):
		super().__init__(message)
		self.balance = balance
		self.amount = amount


class StorageUnavailable(LedgerError):
	"""The store was unreachable or the atomic commit did not complete. Nothing was written."""
	code = "storage_unavailable"


class NotFound(LedgerError):
	code = "not_found"


class HistoryImmutable(LedgerError):
	code = "history_immutable"


class InvalidActionType(LedgerError):
	code = "invalid_action_type"
