from django.contrib import admin

from seatcall.chat import models


@admin.register(models.Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "content", "created_at"]
    search_fields = ["content"]
    list_filter = ["created_at"]
