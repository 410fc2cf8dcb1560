"""Error taxonomy for relay and record-store operations.

Every error is a DRF ``APIException`` so HTTP views render it with the right
status code as-is. Socket handlers turn the same exceptions into structured
rejections with :func:`rejection_payload`.
"""

from __future__ import annotations

from typing import Any

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException


class RelayError(APIException):
    """Base class for recoverable errors reported to the originating client."""


class NotFound(RelayError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("Record not found.")
    default_code = "not_found"


class Conflict(RelayError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _("Record conflicts with an existing one.")
    default_code = "conflict"


class Unauthorized(RelayError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = _("Missing or invalid credentials.")
    default_code = "unauthorized"


class Forbidden(RelayError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Not allowed to act on this record.")
    default_code = "forbidden"


class InvalidTransition(RelayError):
    """Requested call status change is outside the allowed transition set.

    Callers treat it as a no-op; it never reaches a client.
    """

    status_code = status.HTTP_409_CONFLICT
    default_detail = _("Illegal call status transition.")
    default_code = "invalid_transition"


class StoreFailure(RelayError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = _("Record store unavailable, nothing was changed.")
    default_code = "store_failure"


def _plain_detail(detail: Any) -> Any:
    # Field errors always come out as lists of plain strings.
    if isinstance(detail, dict):
        return {
            str(key): [str(v) for v in value]
            if isinstance(value, list)
            else [str(value)]
            for key, value in detail.items()
        }
    if isinstance(detail, list):
        return [str(v) for v in detail]
    return str(detail)


def rejection_payload(exc: APIException) -> dict[str, Any]:
    """Build the ``{"ok": False, ...}`` body sent back over the socket.

    ``detail`` is a plain string, a list of strings, or a dict of field name
    to list of strings, whatever the DRF version.
    """

    codes = exc.get_codes()
    code = codes if isinstance(codes, str) else "invalid"
    return {"ok": False, "error": code, "detail": _plain_detail(exc.detail)}
