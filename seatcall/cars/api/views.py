"""Cars and seats endpoints."""

from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import mixins
from rest_framework import status
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from seatcall.cars.api.serializers import CarSerializer
from seatcall.cars.api.serializers import SeatSerializer
from seatcall.cars.models import Car
from seatcall.cars.models import Seat
from seatcall.cars.services import claim_seat
from seatcall.cars.services import create_seat
from seatcall.cars.services import release_seat
from seatcall.users.api.permissions import IsStaff
from seatcall.users.api.permissions import IsStaffOrReadOnly


class CarViewSet(viewsets.ModelViewSet):
    queryset = Car.objects.all()
    serializer_class = CarSerializer
    permission_classes = [IsStaffOrReadOnly]


class SeatViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Seats; anyone signed in may claim or release one.

    Release is not restricted to the occupant: freeing a seat someone else
    holds is an allowed override.
    """

    serializer_class = SeatSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        qs = Seat.objects.select_related("car")
        car_id = self.request.query_params.get("car")
        if car_id and car_id.isdigit():
            qs = qs.filter(car_id=int(car_id))
        return qs

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsStaff()]
        return [p() for p in self.permission_classes]

    @extend_schema(parameters=[OpenApiParameter("car", int, required=False)])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def perform_create(self, serializer):
        data = serializer.validated_data
        serializer.instance = create_seat(data["car"].pk, data["seat_number"])

    @extend_schema(request=None, responses=SeatSerializer)
    @action(detail=True, methods=["post"])
    def claim(self, request, pk=None):
        seat = claim_seat(int(pk), request.user.pk)
        return Response(self.get_serializer(seat).data, status=status.HTTP_200_OK)

    @extend_schema(request=None, responses=SeatSerializer)
    @action(detail=True, methods=["post"])
    def release(self, request, pk=None):
        seat = release_seat(int(pk), actor_id=request.user.pk)
        return Response(self.get_serializer(seat).data, status=status.HTTP_200_OK)
