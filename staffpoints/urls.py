"""URL routing for the ledger API.


The /api/ namespace exposes balance, mutation, history and statement endpoints;
/admin/ gives a read-only view over balances and history.
"""

from django.contrib import admin
from django.urls import path, include


urlpatterns = [
	path("admin/", admin.site.urls),
	path("api/", include("api.urls")),
]
