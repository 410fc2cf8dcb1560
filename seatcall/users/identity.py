"""Identity Service: turn a credential into a stable user id.

The Socket.IO handshake calls :func:`verify` directly; HTTP requests go
through SimpleJWT's DRF authentication class, which performs the same
validation.
"""

from __future__ import annotations

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError

from seatcall.core.exceptions import Unauthorized


def verify(credential: str | None) -> int:
    """Return the id of the active user owning ``credential`` (a JWT access token).

    Raises ``Unauthorized`` with code ``jwt_expired`` for expired tokens (the
    client is expected to refresh) and ``unauthorized`` for anything else.
    """

    if not credential:
        msg = "Missing credential."
        raise Unauthorized(msg)

    jwt_auth = JWTAuthentication()
    try:
        validated = jwt_auth.get_validated_token(credential)
        user = jwt_auth.get_user(validated)
    except (TokenError, AuthenticationFailed) as exc:
        # InvalidToken carries the per-token-class messages in its detail.
        message = str(getattr(exc, "detail", exc))
        if "is expired" in message or "has expired" in message:
            msg = "Token is expired."
            raise Unauthorized(msg, code="jwt_expired") from exc
        msg = "Token is invalid."
        raise Unauthorized(msg) from exc

    return int(user.id)
