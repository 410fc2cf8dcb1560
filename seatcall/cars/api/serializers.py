from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from seatcall.cars.models import Car
from seatcall.cars.models import Seat


class CarSerializer(serializers.ModelSerializer):
    occupied_seats = serializers.SerializerMethodField()

    class Meta:
        model = Car
        fields = "__all__"
        read_only_fields = ("created_at", "updated_at")

    def get_occupied_seats(self, obj: Car) -> int:
        return obj.seats.filter(is_occupied=True).count()


class SeatSerializer(serializers.ModelSerializer):
    class Meta:
        model = Seat
        fields = "__all__"
        read_only_fields = ("is_occupied", "user", "created_at", "updated_at")
        # (car, seat_number) uniqueness is left to the database so a duplicate
        # is reported as 409 Conflict rather than a 400 validation error.
        validators = []

    def validate(self, attrs):
        car = attrs.get("car")
        seat_number = attrs.get("seat_number")
        if car is not None and seat_number is not None:
            if seat_number < 1 or seat_number > car.capacity:
                msg = _("Seat number must be between 1 and the car capacity.")
                raise serializers.ValidationError({"seat_number": msg})
        return attrs
