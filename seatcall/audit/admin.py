from django.contrib import admin

from seatcall.audit import models


@admin.register(models.AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["id", "action", "actor", "message", "model_name", "record_id"]
    search_fields = ["action", "message", "model_name"]
    list_filter = ["action", "created_at"]
