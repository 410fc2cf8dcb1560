from http import HTTPStatus
from unittest import mock

import pytest
from rest_framework.test import APIClient

from seatcall.calls.models import Call
from seatcall.users.models import User


@pytest.mark.django_db
class TestCallAPI:
    def setup_method(self):
        self.client = APIClient()
        self._publish = mock.patch("seatcall.calls.services.publish_call_updated")
        self._publish.start()

    def teardown_method(self):
        self._publish.stop()

    def test_create_call(self, user, other_user):
        self.client.force_authenticate(user=user)
        res = self.client.post(
            "/api/v1/calls/", {"receiver": other_user.id}, format="json"
        )
        assert res.status_code == HTTPStatus.CREATED
        assert res.data["caller"] == user.id
        assert res.data["receiver"] == other_user.id
        assert res.data["status"] == "pending"
        assert res.data["ended_at"] is None

    def test_cannot_call_yourself(self, user):
        self.client.force_authenticate(user=user)
        res = self.client.post("/api/v1/calls/", {"receiver": user.id}, format="json")
        assert res.status_code == HTTPStatus.BAD_REQUEST
        assert "receiver" in res.data

    def test_unknown_receiver(self, user):
        self.client.force_authenticate(user=user)
        res = self.client.post("/api/v1/calls/", {"receiver": 999}, format="json")
        assert res.status_code == HTTPStatus.BAD_REQUEST

    def test_list_shows_only_own_calls(self, user, other_user):
        outsider = User.objects.create_user(username="eve", password="password")  # noqa: S106
        mine = Call.objects.create(caller=user, receiver=other_user)
        Call.objects.create(caller=other_user, receiver=outsider)

        self.client.force_authenticate(user=user)
        res = self.client.get("/api/v1/calls/")

        assert res.status_code == HTTPStatus.OK
        assert [c["id"] for c in res.data["results"]] == [mine.id]

    def test_staff_sees_all_calls(self, user, other_user, staff_user):
        Call.objects.create(caller=user, receiver=other_user)
        Call.objects.create(caller=other_user, receiver=user)

        self.client.force_authenticate(user=staff_user)
        res = self.client.get("/api/v1/calls/")

        assert res.data["count"] == 2

    def test_answer_then_end(self, user, other_user):
        call = Call.objects.create(caller=user, receiver=other_user)
        self.client.force_authenticate(user=other_user)

        res = self.client.post(f"/api/v1/calls/{call.id}/answer/")
        assert res.status_code == HTTPStatus.OK
        assert res.data["status"] == "active"

        res = self.client.post(f"/api/v1/calls/{call.id}/end/")
        assert res.data["status"] == "ended"
        assert res.data["ended_at"] is not None

        ended_at = res.data["ended_at"]
        res = self.client.post(f"/api/v1/calls/{call.id}/end/")
        assert res.status_code == HTTPStatus.OK
        assert res.data["ended_at"] == ended_at

    def test_outsider_cannot_end_call(self, user, other_user):
        outsider = User.objects.create_user(username="eve", password="password")  # noqa: S106
        call = Call.objects.create(caller=user, receiver=other_user)

        self.client.force_authenticate(user=outsider)
        res = self.client.post(f"/api/v1/calls/{call.id}/end/")

        assert res.status_code == HTTPStatus.NOT_FOUND
        call.refresh_from_db()
        assert call.status == Call.Status.PENDING

    def test_caller_cannot_answer_own_call(self, user, other_user):
        call = Call.objects.create(caller=user, receiver=other_user)

        self.client.force_authenticate(user=user)
        res = self.client.post(f"/api/v1/calls/{call.id}/answer/")

        assert res.status_code == HTTPStatus.FORBIDDEN
        call.refresh_from_db()
        assert call.status == Call.Status.PENDING

    def test_staff_may_end_any_call(self, user, other_user, staff_user):
        call = Call.objects.create(caller=user, receiver=other_user)

        self.client.force_authenticate(user=staff_user)
        res = self.client.post(f"/api/v1/calls/{call.id}/end/")

        assert res.status_code == HTTPStatus.OK
        assert res.data["status"] == "ended"
