from rest_framework import serializers

from seatcall.chat.models import Message


class MessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Message
        fields = ("id", "content", "user", "created_at")
        read_only_fields = fields
