from django.conf import settings
from django.db import models
from django.db.models import F
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from seatcall.core.exceptions import InvalidTransition


class Call(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        ACTIVE = "active", _("Active")
        ENDED = "ended", _("Ended")

    # Legal targets per status; ended is terminal.
    TRANSITIONS = {
        Status.PENDING: frozenset({Status.ACTIVE, Status.ENDED}),
        Status.ACTIVE: frozenset({Status.ENDED}),
        Status.ENDED: frozenset(),
    }

    caller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="outgoing_calls",
    )
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="incoming_calls",
    )
    status = models.CharField(
        max_length=50, choices=Status.choices, default=Status.PENDING
    )
    started_at = models.DateTimeField(default=timezone.now)
    ended_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-started_at"]
        constraints = [
            models.CheckConstraint(
                condition=~Q(caller=F("receiver")),
                name="call_caller_is_not_receiver",
            ),
            models.CheckConstraint(
                condition=(
                    Q(status="ended", ended_at__isnull=False)
                    | (~Q(status="ended") & Q(ended_at__isnull=True))
                ),
                name="call_ended_at_iff_ended",
            ),
        ]

    def __str__(self):
        return f"Call {self.pk}: {self.caller_id}→{self.receiver_id} ({self.status})"

    @classmethod
    def sources_for(cls, target: str) -> list[str]:
        """Statuses from which ``target`` can be reached."""
        return [str(s) for s, targets in cls.TRANSITIONS.items() if target in targets]

    def check_transition(self, target: str) -> None:
        if target not in self.TRANSITIONS[self.Status(self.status)]:
            msg = f"Call {self.pk} cannot move from {self.status} to {target}."
            raise InvalidTransition(msg)

    def involves(self, user_id: int | None) -> bool:
        return user_id is not None and user_id in (self.caller_id, self.receiver_id)

    def can_answer(self, user_id: int | None) -> bool:
        return user_id is not None and user_id == self.receiver_id
