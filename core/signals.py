"""Signals emitted by the ledger engine.

points_modified is sent after a mutation commits. Its payload is deliberately
narrow: action_type, target_user_id, amount, actor_user_id, timestamp.
Balances and reasons are never broadcast.
"""

from django.dispatch import Signal

points_modified = Signal()
