from unittest import mock

import pytest
from django.db import OperationalError

from seatcall.audit.models import AuditLog
from seatcall.cars.models import Seat
from seatcall.cars.services import claim_seat
from seatcall.cars.services import create_seat
from seatcall.cars.services import release_seat
from seatcall.core.exceptions import Conflict
from seatcall.core.exceptions import NotFound
from seatcall.core.exceptions import StoreFailure


@pytest.mark.django_db
class TestCreateSeat:
    def test_create(self, car):
        seat = create_seat(car.id, 3)
        assert seat.car_id == car.id
        assert seat.seat_number == 3
        assert seat.is_occupied is False

    def test_duplicate_is_conflict(self, car, seat):
        with pytest.raises(Conflict):
            create_seat(car.id, seat.seat_number)
        assert Seat.objects.filter(car=car).count() == 1

    def test_unknown_car(self, db):
        with pytest.raises(NotFound):
            create_seat(999, 1)


@pytest.mark.django_db
class TestClaimSeat:
    def test_claim_free_seat(self, seat, user):
        claimed = claim_seat(seat.id, user.id)
        assert claimed.is_occupied is True
        assert claimed.user_id == user.id

    def test_claim_is_idempotent_for_occupant(self, seat, user):
        claim_seat(seat.id, user.id)
        again = claim_seat(seat.id, user.id)
        assert again.user_id == user.id
        assert AuditLog.objects.filter(action="seat_claimed").count() == 1

    def test_second_claimer_gets_conflict(self, seat, user, other_user):
        claim_seat(seat.id, user.id)
        with pytest.raises(Conflict):
            claim_seat(seat.id, other_user.id)
        seat.refresh_from_db()
        assert seat.user_id == user.id

    def test_unknown_seat(self, user):
        with pytest.raises(NotFound):
            claim_seat(999, user.id)

    def test_store_failure_leaves_seat_untouched(self, seat, user):
        with (
            mock.patch.object(
                Seat.objects, "filter", side_effect=OperationalError("db gone")
            ),
            pytest.raises(StoreFailure),
        ):
            claim_seat(seat.id, user.id)
        seat.refresh_from_db()
        assert seat.is_occupied is False
        assert seat.user_id is None

    def test_claim_is_audited(self, seat, user):
        claim_seat(seat.id, user.id)
        log = AuditLog.objects.get(action="seat_claimed")
        assert log.actor_id == user.id
        assert log.model_name == "Seat"
        assert log.record_id == seat.id
        assert log.after == {"is_occupied": True, "user_id": user.id}


@pytest.mark.django_db
class TestReleaseSeat:
    def test_release_frees_seat(self, seat, user):
        claim_seat(seat.id, user.id)
        released = release_seat(seat.id, actor_id=user.id)
        assert released.is_occupied is False
        assert released.user_id is None
        log = AuditLog.objects.get(action="seat_released")
        assert log.before == {"is_occupied": True, "user_id": user.id}

    def test_release_free_seat_is_noop(self, seat):
        release_seat(seat.id)
        assert not AuditLog.objects.filter(action="seat_released").exists()

    def test_released_seat_can_be_claimed_by_someone_else(
        self, seat, user, other_user
    ):
        claim_seat(seat.id, user.id)
        release_seat(seat.id, actor_id=user.id)
        assert claim_seat(seat.id, other_user.id).user_id == other_user.id

    def test_unknown_seat(self, db):
        with pytest.raises(NotFound):
            release_seat(999)


@pytest.mark.django_db
class TestOccupantDeleted:
    def test_deleting_occupant_frees_seat(self, seat, user, other_user):
        claim_seat(seat.id, user.id)
        user_id = user.id
        user.delete()

        seat.refresh_from_db()
        assert seat.is_occupied is False
        assert seat.user_id is None
        log = AuditLog.objects.get(action="seat_released", record_id=seat.id)
        assert log.message == "Occupant account deleted."
        assert log.before == {"is_occupied": True, "user_id": user_id}
        assert claim_seat(seat.id, other_user.id).user_id == other_user.id

    def test_deleting_user_without_seat_leaves_seats_alone(
        self, seat, user, other_user
    ):
        claim_seat(seat.id, user.id)
        other_user.delete()
        seat.refresh_from_db()
        assert seat.user_id == user.id
        assert not AuditLog.objects.filter(action="seat_released").exists()

    def test_occupied_flag_without_occupant_is_claimable(self, seat, user):
        Seat.objects.filter(pk=seat.pk).update(is_occupied=True, user=None)
        claimed = claim_seat(seat.id, user.id)
        assert claimed.is_occupied is True
        assert claimed.user_id == user.id


@pytest.mark.django_db(transaction=True)
class TestConcurrentClaims:
    def test_exactly_one_of_two_claimers_wins(
        self, seat, user, other_user, run_concurrently
    ):
        results = run_concurrently(
            lambda: claim_seat(seat.id, user.id),
            lambda: claim_seat(seat.id, other_user.id),
        )

        winners = [r for r in results if isinstance(r, Seat)]
        losers = [r for r in results if isinstance(r, Conflict)]
        assert len(winners) == 1
        assert len(losers) == 1
        seat.refresh_from_db()
        assert seat.is_occupied is True
        assert seat.user_id == winners[0].user_id
        assert AuditLog.objects.filter(action="seat_claimed").count() == 1
