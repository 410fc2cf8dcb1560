from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from seatcall.users.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ["id", "username", "is_staff", "is_active", "created_at"]
    search_fields = ["username", "email"]
