from datetime import timedelta

import pytest
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.tokens import RefreshToken

from seatcall.core.exceptions import Unauthorized
from seatcall.users.identity import verify


@pytest.mark.django_db
class TestVerify:
    def test_access_token_resolves_to_user_id(self, user):
        assert verify(str(AccessToken.for_user(user))) == user.id

    @pytest.mark.parametrize("credential", [None, ""])
    def test_missing_credential(self, credential):
        with pytest.raises(Unauthorized) as exc_info:
            verify(credential)
        assert exc_info.value.get_codes() == "unauthorized"

    def test_malformed_token(self):
        with pytest.raises(Unauthorized) as exc_info:
            verify("definitely.not.a-jwt")
        assert exc_info.value.get_codes() == "unauthorized"

    def test_refresh_token_is_not_accepted(self, user):
        with pytest.raises(Unauthorized):
            verify(str(RefreshToken.for_user(user)))

    def test_expired_token(self, user):
        token = AccessToken.for_user(user)
        token.set_exp(lifetime=-timedelta(seconds=30))

        with pytest.raises(Unauthorized) as exc_info:
            verify(str(token))
        assert exc_info.value.get_codes() == "jwt_expired"

    def test_inactive_user(self, user):
        token = str(AccessToken.for_user(user))
        user.is_active = False
        user.save(update_fields=["is_active"])

        with pytest.raises(Unauthorized):
            verify(token)
