from django.contrib.auth import get_user_model
from rest_framework import serializers

from seatcall.calls.models import Call

User = get_user_model()


class CallSerializer(serializers.ModelSerializer):
    receiver = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(is_active=True)
    )

    class Meta:
        model = Call
        fields = (
            "id",
            "caller",
            "receiver",
            "status",
            "started_at",
            "ended_at",
        )
        read_only_fields = ("id", "caller", "status", "started_at", "ended_at")

    def validate_receiver(self, value):
        request = self.context.get("request")
        if request is not None and value.pk == request.user.pk:
            msg = "A user cannot call themselves."
            raise serializers.ValidationError(msg)
        return value
