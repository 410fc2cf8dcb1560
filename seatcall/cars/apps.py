from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class CarsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "seatcall.cars"
    verbose_name = _("Cars")

    def ready(self):
        import seatcall.cars.signals  # noqa: F401, PLC0415
