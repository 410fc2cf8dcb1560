import threading

import pytest
from django.db import connections
from rest_framework.test import APIClient

from seatcall.cars.models import Car
from seatcall.cars.models import Seat
from seatcall.users.models import User

TEST_PASSWORD = "password"  # noqa: S105


@pytest.fixture
def user(db) -> User:
    return User.objects.create_user(username="alice", password=TEST_PASSWORD)


@pytest.fixture
def other_user(db) -> User:
    return User.objects.create_user(username="bob", password=TEST_PASSWORD)


@pytest.fixture
def staff_user(db) -> User:
    return User.objects.create_user(
        username="dispatcher", password=TEST_PASSWORD, is_staff=True
    )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def car(db) -> Car:
    return Car.objects.create(name="Car 7", capacity=4)


@pytest.fixture
def seat(car) -> Seat:
    return Seat.objects.create(car=car, seat_number=1)


def _start_together(*funcs):
    """Start every callable at the same instant, each on its own thread.

    Returns one result per callable, in order; a raised exception is
    returned in place of the result.
    """

    barrier = threading.Barrier(len(funcs))
    results = [None] * len(funcs)

    def worker(index, func):
        try:
            barrier.wait(timeout=10)
            results[index] = func()
        except Exception as exc:  # noqa: BLE001
            results[index] = exc
        finally:
            connections.close_all()

    threads = [
        threading.Thread(target=worker, args=(i, func)) for i, func in enumerate(funcs)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return results


@pytest.fixture
def run_concurrently():
    return _start_together
