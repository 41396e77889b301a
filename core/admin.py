"""Read-only admin. Balances change only through core.services.modify_points."""

from django.contrib import admin

from .models import StaffPoints, PointsHistory


class ReadOnlyAdmin(admin.ModelAdmin):
	def has_add_permission(self, request):
		return False

	def has_change_permission(self, request, obj=None):
		return False

	def has_delete_permission(self, request, obj=None):
		return False


@admin.register(StaffPoints)
class StaffPointsAdmin(ReadOnlyAdmin):
	list_display = ("user_id", "points", "updated_at")
	search_fields = ("user_id",)


@admin.register(PointsHistory)
class PointsHistoryAdmin(ReadOnlyAdmin):
	list_display = ("id", "target_user_id", "action_type", "amount", "before_points", "after_points", "action_by_user_id", "created_at")
	list_filter = ("action_type",)
	search_fields = ("target_user_id", "action_by_user_id")
	ordering = ("-created_at", "-id")
