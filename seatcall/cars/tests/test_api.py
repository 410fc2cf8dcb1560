from http import HTTPStatus

import pytest
from rest_framework.test import APIClient

from seatcall.cars.models import Car
from seatcall.cars.models import Seat


@pytest.mark.django_db
class TestCarAPI:
    def setup_method(self):
        self.client = APIClient()

    def test_staff_creates_car(self, staff_user):
        self.client.force_authenticate(user=staff_user)
        res = self.client.post(
            "/api/v1/cars/", {"name": "Car 9", "capacity": 6}, format="json"
        )
        assert res.status_code == HTTPStatus.CREATED
        assert res.data["status"] == Car.Status.AVAILABLE
        assert res.data["occupied_seats"] == 0

    def test_regular_user_cannot_create_car(self, user):
        self.client.force_authenticate(user=user)
        res = self.client.post(
            "/api/v1/cars/", {"name": "Car 9", "capacity": 6}, format="json"
        )
        assert res.status_code == HTTPStatus.FORBIDDEN

    def test_regular_user_lists_cars(self, user, car):
        self.client.force_authenticate(user=user)
        res = self.client.get("/api/v1/cars/")
        assert res.status_code == HTTPStatus.OK
        assert [c["id"] for c in res.data["results"]] == [car.id]


@pytest.mark.django_db
class TestSeatAPI:
    def setup_method(self):
        self.client = APIClient()

    def test_staff_creates_seat(self, staff_user, car):
        self.client.force_authenticate(user=staff_user)
        res = self.client.post(
            "/api/v1/seats/", {"car": car.id, "seat_number": 2}, format="json"
        )
        assert res.status_code == HTTPStatus.CREATED
        assert res.data["seat_number"] == 2
        assert res.data["is_occupied"] is False

    def test_duplicate_seat_is_conflict(self, staff_user, seat):
        self.client.force_authenticate(user=staff_user)
        res = self.client.post(
            "/api/v1/seats/",
            {"car": seat.car_id, "seat_number": seat.seat_number},
            format="json",
        )
        assert res.status_code == HTTPStatus.CONFLICT
        assert res.data["detail"].code == "conflict"

    def test_seat_number_beyond_capacity(self, staff_user, car):
        self.client.force_authenticate(user=staff_user)
        res = self.client.post(
            "/api/v1/seats/", {"car": car.id, "seat_number": 5}, format="json"
        )
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert "seat_number" in res.data

    def test_regular_user_cannot_create_seat(self, user, car):
        self.client.force_authenticate(user=user)
        res = self.client.post(
            "/api/v1/seats/", {"car": car.id, "seat_number": 2}, format="json"
        )
        assert res.status_code == HTTPStatus.FORBIDDEN

    def test_list_filtered_by_car(self, user, seat):
        other_car = Car.objects.create(name="Car 8", capacity=2)
        Seat.objects.create(car=other_car, seat_number=1)
        self.client.force_authenticate(user=user)

        res = self.client.get("/api/v1/seats/", {"car": seat.car_id})

        assert res.status_code == HTTPStatus.OK
        assert [s["id"] for s in res.data["results"]] == [seat.id]

    def test_claim_and_conflict(self, user, other_user, seat):
        self.client.force_authenticate(user=user)
        res = self.client.post(f"/api/v1/seats/{seat.id}/claim/")
        assert res.status_code == HTTPStatus.OK
        assert res.data["user"] == user.id
        assert res.data["is_occupied"] is True

        self.client.force_authenticate(user=other_user)
        res = self.client.post(f"/api/v1/seats/{seat.id}/claim/")
        assert res.status_code == HTTPStatus.CONFLICT

    def test_release(self, user, seat):
        self.client.force_authenticate(user=user)
        self.client.post(f"/api/v1/seats/{seat.id}/claim/")
        res = self.client.post(f"/api/v1/seats/{seat.id}/release/")
        assert res.status_code == HTTPStatus.OK
        assert res.data["is_occupied"] is False
        assert res.data["user"] is None

    def test_claim_unknown_seat(self, user):
        self.client.force_authenticate(user=user)
        res = self.client.post("/api/v1/seats/999/claim/")
        assert res.status_code == HTTPStatus.NOT_FOUND
