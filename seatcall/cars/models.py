from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _


class Car(models.Model):
    class Status(models.TextChoices):
        AVAILABLE = "available", _("Available")
        IN_USE = "in_use", _("In use")
        MAINTENANCE = "maintenance", _("Maintenance")

    name = models.CharField(max_length=100)
    capacity = models.PositiveIntegerField(help_text=_("Number of seats"))
    status = models.CharField(
        max_length=50, choices=Status.choices, default=Status.AVAILABLE
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name


class Seat(models.Model):
    car = models.ForeignKey(Car, on_delete=models.CASCADE, related_name="seats")
    seat_number = models.PositiveIntegerField()
    is_occupied = models.BooleanField(default=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="seats",
        help_text=_("Current occupant"),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["car_id", "seat_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["car", "seat_number"], name="unique_seat_number_per_car"
            ),
            models.CheckConstraint(
                condition=Q(is_occupied=True) | Q(user__isnull=True),
                name="seat_occupant_requires_occupied",
            ),
        ]

    def __str__(self):
        return f"{self.car} #{self.seat_number}"
