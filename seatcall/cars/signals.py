from django.conf import settings
from django.db.models.signals import pre_delete
from django.dispatch import receiver
from django.utils import timezone

from seatcall.audit.utils import log_action

from .models import Seat


@receiver(pre_delete, sender=settings.AUTH_USER_MODEL)
def release_seats_of_deleted_user(sender, instance, **kwargs):
    # on_delete=SET_NULL only clears the FK; is_occupied is reset here.
    seat_ids = list(Seat.objects.filter(user=instance).values_list("pk", flat=True))
    if not seat_ids:
        return
    Seat.objects.filter(pk__in=seat_ids).update(
        is_occupied=False, user=None, updated_at=timezone.now()
    )
    for seat_id in seat_ids:
        log_action(
            "seat_released",
            message="Occupant account deleted.",
            model_name="Seat",
            record_id=seat_id,
            before={"is_occupied": True, "user_id": instance.pk},
            after={"is_occupied": False, "user_id": None},
        )
