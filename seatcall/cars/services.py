"""Seat assignment: at most one occupant per seat.

Claims are decided by a single conditional
``UPDATE ... WHERE is_occupied = false OR user_id IS NULL``; the database
serializes racing claimers so exactly one of them matches the row.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from seatcall.audit.utils import log_action
from seatcall.cars.models import Car
from seatcall.cars.models import Seat
from seatcall.core.exceptions import Conflict
from seatcall.core.store import record_store

logger = logging.getLogger(__name__)


def create_seat(car_id: int, seat_number: int) -> Seat:
    """Create a seat; a duplicate ``(car, seat_number)`` raises ``Conflict``."""

    with record_store("Car"):
        car = Car.objects.get(pk=car_id)
    with record_store("Seat"):
        try:
            with transaction.atomic():
                return Seat.objects.create(car=car, seat_number=seat_number)
        except IntegrityError as exc:
            msg = f"Seat {seat_number} already exists in car {car_id}."
            raise Conflict(msg) from exc


def claim_seat(seat_id: int, user_id: int) -> Seat:
    """Give ``seat_id`` to ``user_id``.

    Idempotent for the current occupant; ``Conflict`` for anyone else.
    """

    with record_store("Seat"), transaction.atomic():
        # A seat flagged occupied with no occupant is free to take.
        claimed = (
            Seat.objects.filter(pk=seat_id)
            .filter(Q(is_occupied=False) | Q(user__isnull=True))
            .update(is_occupied=True, user_id=user_id, updated_at=timezone.now())
        )
        seat = Seat.objects.get(pk=seat_id)
        if claimed:
            log_action(
                "seat_claimed",
                actor_id=user_id,
                model_name="Seat",
                record_id=seat.pk,
                after={"is_occupied": True, "user_id": user_id},
            )

    if not claimed and seat.user_id != user_id:
        logger.info(
            "Seat %s claim by user %s refused: occupied by %s",
            seat_id,
            user_id,
            seat.user_id,
        )
        msg = f"Seat {seat_id} is occupied by another user."
        raise Conflict(msg)
    return seat


def release_seat(seat_id: int, *, actor_id: int | None = None) -> Seat:
    """Free ``seat_id`` whoever holds it."""

    with record_store("Seat"), transaction.atomic():
        seat = Seat.objects.select_for_update().get(pk=seat_id)
        previous = seat.user_id
        if seat.is_occupied or previous is not None:
            seat.is_occupied = False
            seat.user = None
            seat.save(update_fields=["is_occupied", "user", "updated_at"])
            log_action(
                "seat_released",
                actor_id=actor_id,
                model_name="Seat",
                record_id=seat.pk,
                before={"is_occupied": True, "user_id": previous},
                after={"is_occupied": False, "user_id": None},
            )
    return seat
