from django.conf import settings
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from seatcall.calls.api.views import CallViewSet
from seatcall.cars.api.views import CarViewSet
from seatcall.cars.api.views import SeatViewSet
from seatcall.chat.api.views import MessageViewSet
from seatcall.users.api.views import UserViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet)
router.register("cars", CarViewSet)
router.register("seats", SeatViewSet, basename="seat")
router.register("calls", CallViewSet, basename="call")
router.register("messages", MessageViewSet)


app_name = "api"
urlpatterns = router.urls
