"""Passbook-style points statements.

render_statement is pure: given the same history (newest first) and the same
generated_at it returns byte-identical text. Only the GENERATED line depends
on the clock.
"""

from datetime import datetime, timezone as dt_timezone
from typing import Iterable, Mapping

from django.utils import timezone
from django.utils.text import get_valid_filename

from .models import ActionType

RULE = "=" * 67
THIN_RULE = "-" * 67
MEMO_INDENT = " " * 21


def actor_label(actor_user_id, actor_labels: Mapping[str, str] | None = None) -> str:
	actor_user_id = str(actor_user_id)
	if actor_labels and actor_user_id in actor_labels:
		return actor_labels[actor_user_id]
	return f"User_{actor_user_id[:8]}"


def _utc(value: datetime) -> datetime:
	return value.astimezone(dt_timezone.utc)


def format_row(record, actor_labels: Mapping[str, str] | None = None) -> list[str]:
	"""
	One transaction line, plus a memo line when the record has a reason.
	"""
	created = _utc(record.created_at)
	if record.action_type == ActionType.ADD:
		action, amount = "[ADD]   ", f"+{record.amount}"
	else:
		action, amount = "[REMOVE]", f"-{record.amount}"
	admin = actor_label(record.action_by_user_id, actor_labels)
	lines = [
		f"{created:%Y-%m-%d}   {created:%H:%M}   {admin:<15} {action}   {amount:>7}   {record.after_points:>8}"
	]
	if record.reason:
		lines.append(f"{MEMO_INDENT}Memo: {record.reason}")
	return lines


def render_statement(subject_label: str, history: Iterable, *, subject_id: str | None = None,
		generated_at: datetime | None = None, actor_labels: Mapping[str, str] | None = None) -> str:
	history = list(history)
	generated = _utc(generated_at or timezone.now())
	subject = f"{subject_label} (ID: {subject_id})" if subject_id else subject_label

	lines = [
		RULE,
		"                  OFFICIAL POINTS STATEMENT",
		RULE,
		f"USER     : {subject}",
		f"GENERATED: {generated:%Y-%m-%d %H:%M} UTC",
		RULE,
		"DATE         TIME    ADMIN           ACTION      AMT    BALANCE",
		THIN_RULE,
	]
	for record in history:
		lines.extend(format_row(record, actor_labels))
		lines.append("")

	closing = history[0].after_points if history else 0
	lines.extend([
		THIN_RULE,
		f"{MEMO_INDENT}CLOSING BALANCE             {closing:>8}",
		RULE,
		"* This is an automated record.",
	])
	return "\n".join(lines)


def statement_filename(subject_label: str, generated_at: datetime | None = None) -> str:
	generated = _utc(generated_at or timezone.now())
	return get_valid_filename(f"Statement_{subject_label}_{generated:%Y-%m-%d}.txt")
