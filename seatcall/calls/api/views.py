"""Call records.

Calls are created here; their status then follows the signaling events
(``answer``, ``call-ended``) or the ``answer``/``end`` actions below.
"""

from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import mixins
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from seatcall.calls.api.serializers import CallSerializer
from seatcall.calls.models import Call
from seatcall.calls.services import answer_call
from seatcall.calls.services import end_call
from seatcall.calls.services import initiate_call
from seatcall.users.api.permissions import is_staff


class CallViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = CallSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        user = self.request.user
        qs = Call.objects.all()
        if is_staff(user):
            return qs
        return qs.filter(Q(caller=user) | Q(receiver=user))

    def perform_create(self, serializer):
        receiver = serializer.validated_data["receiver"]
        serializer.instance = initiate_call(self.request.user.pk, receiver.pk)

    @extend_schema(request=None, responses=CallSerializer)
    @action(detail=True, methods=["post"])
    def answer(self, request, pk=None):
        call = self.get_object()
        call, _ = answer_call(
            call.pk, actor_id=request.user.pk, as_staff=is_staff(request.user)
        )
        return Response(self.get_serializer(call).data)

    @extend_schema(request=None, responses=CallSerializer)
    @action(detail=True, methods=["post"])
    def end(self, request, pk=None):
        call = self.get_object()
        call, _ = end_call(
            call.pk, actor_id=request.user.pk, as_staff=is_staff(request.user)
        )
        return Response(self.get_serializer(call).data)
