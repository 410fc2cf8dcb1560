from django.conf import settings
from django.db import models


class Message(models.Model):
    """Chat line. Append-only: the relay never edits or deletes one."""

    content = models.TextField()
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="messages",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.user_id or 'anonymous'}: {self.content[:40]}"
