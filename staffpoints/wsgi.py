"""WSGI entrypoint for the staff points ledger."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "staffpoints.settings")

application = get_wsgi_application()
