from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from seatcall.users.models import User


class UserSerializer(serializers.ModelSerializer[User]):
    class Meta:
        model = User
        fields = ["id", "username", "first_name", "last_name"]
        read_only_fields = ["id", "username"]


class UserSignupSerializer(serializers.Serializer):
    """Signup payload.

    ``username`` is declared explicitly so no unique validator runs here: the
    database constraint decides, and a duplicate surfaces as ``Conflict``.
    """

    username = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True)

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data["username"],
            password=validated_data["password"],
        )

    def to_representation(self, instance):
        return {"id": instance.id, "username": instance.username}
