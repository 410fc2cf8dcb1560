"""Call lifecycle: pending -> active -> ended.

Each transition is one conditional ``UPDATE ... WHERE status IN (<legal
sources>)``. When two peers end the same call at once, the second update
matches no row and nothing is written twice; ``ended_at`` is stamped exactly
once.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from seatcall.audit.utils import log_action
from seatcall.calls.models import Call
from seatcall.core.exceptions import Forbidden
from seatcall.core.exceptions import InvalidTransition
from seatcall.core.store import record_store
from seatcall.realtime.events.calls import publish_call_updated

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Callable

logger = logging.getLogger(__name__)

User = get_user_model()


def initiate_call(caller_id: int, receiver_id: int) -> Call:
    """Create a ``pending`` call record from ``caller_id`` to ``receiver_id``."""

    if caller_id == receiver_id:
        msg = "A user cannot call themselves."
        raise ValidationError({"receiver": [msg]})

    with record_store("User"):
        receiver = User.objects.get(pk=receiver_id, is_active=True)
    with record_store("Call"), transaction.atomic():
        call = Call.objects.create(caller_id=caller_id, receiver=receiver)
        log_action(
            "call_created",
            actor_id=caller_id,
            model_name="Call",
            record_id=call.pk,
            after={"status": call.status},
        )
        transaction.on_commit(lambda: publish_call_updated(call))
    return call


def answer_call(
    call_id: int, *, actor_id: int | None = None, as_staff: bool = False
) -> tuple[Call, bool]:
    """Move a pending call to ``active``. Returns ``(call, changed)``.

    Only the receiver answers; staff may override from the HTTP API.
    """

    return _transition(
        call_id,
        Call.Status.ACTIVE,
        actor_id=actor_id,
        allowed=lambda call: as_staff or call.can_answer(actor_id),
    )


def end_call(
    call_id: int, *, actor_id: int | None = None, as_staff: bool = False
) -> tuple[Call, bool]:
    """Move a pending or active call to ``ended``. Returns ``(call, changed)``.

    Either participant may end the call. Ending an already ended call is a
    no-op: ``ended_at`` keeps its first value.
    """

    return _transition(
        call_id,
        Call.Status.ENDED,
        actor_id=actor_id,
        allowed=lambda call: as_staff or call.involves(actor_id),
        ended_at=timezone.now(),
    )


def _transition(
    call_id: int,
    target: str,
    *,
    actor_id: int | None,
    allowed: Callable[[Call], bool],
    **extra_fields,
) -> tuple[Call, bool]:
    with record_store("Call"), transaction.atomic():
        call = Call.objects.get(pk=call_id)
        if not allowed(call):
            msg = f"User {actor_id} may not move call {call_id} to {target}."
            raise Forbidden(msg)
        previous = call.status
        changed = Call.objects.filter(
            pk=call_id, status__in=Call.sources_for(target)
        ).update(status=target, **extra_fields)
        call.refresh_from_db()
        if changed:
            log_action(
                "call_status_changed",
                actor_id=actor_id,
                model_name="Call",
                record_id=call.pk,
                before={"status": previous},
                after={"status": call.status},
            )
            transaction.on_commit(lambda: publish_call_updated(call))
            return call, True

    try:
        call.check_transition(target)
    except InvalidTransition as exc:
        logger.info("Ignoring transition: %s", exc.detail)
    return call, False
