from django.contrib import admin

from seatcall.calls import models


@admin.register(models.Call)
class CallAdmin(admin.ModelAdmin):
    list_display = ["id", "caller", "receiver", "status", "started_at", "ended_at"]
    list_filter = ["status", "started_at"]
    readonly_fields = ["ended_at"]
