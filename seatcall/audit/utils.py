from __future__ import annotations

from .models import AuditLog


def log_action(  # noqa: PLR0913
    action: str,
    *,
    actor_id: int | None = None,
    message: str = "",
    model_name: str = "",
    record_id: int | None = None,
    before: dict | list | None = None,
    after: dict | list | None = None,
) -> AuditLog:
    """Append one audit row.

    Call it inside the transaction of the change being recorded so the audit
    row and the change commit or roll back together.
    """

    return AuditLog.objects.create(
        action=action,
        actor_id=actor_id,
        message=message,
        model_name=model_name,
        record_id=record_id,
        before=before,
        after=after,
    )
