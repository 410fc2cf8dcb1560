from django.contrib import admin

from seatcall.cars import models


class SeatInline(admin.TabularInline):
    model = models.Seat
    extra = 0


@admin.register(models.Car)
class CarAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "capacity", "status"]
    search_fields = ["name"]
    list_filter = ["status"]
    inlines = [SeatInline]


@admin.register(models.Seat)
class SeatAdmin(admin.ModelAdmin):
    list_display = ["id", "car", "seat_number", "is_occupied", "user"]
    list_filter = ["is_occupied", "car"]
