import pytest
from django.db import IntegrityError
from django.utils import timezone

from seatcall.calls.models import Call
from seatcall.core.exceptions import InvalidTransition


def test_sources_for():
    assert Call.sources_for(Call.Status.ACTIVE) == ["pending"]
    assert sorted(Call.sources_for(Call.Status.ENDED)) == ["active", "pending"]
    assert Call.sources_for(Call.Status.PENDING) == []


@pytest.mark.parametrize(
    ("current", "target", "allowed"),
    [
        ("pending", "active", True),
        ("pending", "ended", True),
        ("active", "ended", True),
        ("active", "pending", False),
        ("active", "active", False),
        ("ended", "active", False),
        ("ended", "ended", False),
    ],
)
def test_check_transition(current, target, allowed):
    call = Call(status=current)
    if allowed:
        call.check_transition(target)
    else:
        with pytest.raises(InvalidTransition):
            call.check_transition(target)


def test_involves():
    call = Call(caller_id=1, receiver_id=2)
    assert call.involves(1)
    assert call.involves(2)
    assert not call.involves(3)
    assert not call.involves(None)


@pytest.mark.django_db
class TestCallConstraints:
    def test_new_call_is_pending_without_ended_at(self, user, other_user):
        call = Call.objects.create(caller=user, receiver=other_user)
        assert call.status == Call.Status.PENDING
        assert call.ended_at is None
        assert call.started_at is not None

    def test_cannot_call_yourself(self, user):
        with pytest.raises(IntegrityError):
            Call.objects.create(caller=user, receiver=user)

    def test_ended_requires_ended_at(self, user, other_user):
        with pytest.raises(IntegrityError):
            Call.objects.create(
                caller=user, receiver=other_user, status=Call.Status.ENDED
            )

    def test_ended_at_only_when_ended(self, user, other_user):
        with pytest.raises(IntegrityError):
            Call.objects.create(
                caller=user, receiver=other_user, ended_at=timezone.now()
            )


def test_can_answer_only_receiver():
    call = Call(caller_id=1, receiver_id=2)
    assert call.can_answer(2)
    assert not call.can_answer(1)
    assert not call.can_answer(3)
    assert not call.can_answer(None)
