from rest_framework import viewsets

from seatcall.chat.api.serializers import MessageSerializer
from seatcall.chat.models import Message


class MessageViewSet(viewsets.ReadOnlyModelViewSet):
    """Chat history, newest first. New messages arrive over the socket."""

    queryset = Message.objects.all()
    serializer_class = MessageSerializer
