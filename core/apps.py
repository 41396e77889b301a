from django.apps import AppConfig
from django.conf import settings


class CoreConfig(AppConfig):
	name = "core"
	verbose_name = "Points ledger"
	default_auto_field = "django.db.models.BigAutoField"

	def ready(self):
		from .audit import log_points_modified
		from .cooldown import CooldownRegistry
		from .signals import points_modified

		points_modified.connect(log_points_modified, dispatch_uid="core.audit.log_points_modified")

		# One registry per process, shared by every request handler
		self.cooldowns = CooldownRegistry(duration=getattr(settings, "POINTS_COOLDOWN_SECONDS", 3))
