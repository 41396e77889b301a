"""Public API surface for the points ledger.

- /points/*: balance reads and add/remove mutations
- /history/*: history listing and statement download
- /debug/summary: ledger invariant check
"""

from django.urls import path
from .views_ops import health, add, remove
from .views_read import balance, history, statement, debug_summary


urlpatterns = [
	path("health", health),
	path("points/add", add),
	path("points/remove", remove),
	path("points/<str:user_id>", balance),
	path("history/<str:user_id>", history),
	path("history/<str:user_id>/statement", statement),
	path("debug/summary", debug_summary),
]
