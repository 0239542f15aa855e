"""Inquiry models."""

from typing import ClassVar

from django.db import models


class Inquiry(models.Model):
    """A public inquiry submission and the outcome of its confirmation email."""

    full_name = models.TextField()
    email = models.TextField()
    phone_number = models.TextField(null=True, blank=True)  # noqa: DJ001
    service_type = models.TextField(null=True, blank=True)  # noqa: DJ001
    budget_range = models.TextField(null=True, blank=True)  # noqa: DJ001
    project_description = models.TextField(null=True, blank=True)  # noqa: DJ001

    # Confirmation email outcome, written once after the delivery attempt
    notification_sent = models.BooleanField(default=False)
    notification_error = models.TextField(null=True, blank=True)  # noqa: DJ001
    notification_response = models.TextField(null=True, blank=True)  # noqa: DJ001
    notification_sent_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "inquiries"
        ordering: ClassVar[list[str]] = ["-created_at", "-id"]
        verbose_name = "inquiry"
        verbose_name_plural = "inquiries"

    def __str__(self) -> str:
        return f"{self.full_name} - {self.email} ({self.created_at:%Y-%m-%d})"

    def to_dict(self) -> dict:
        """Serialize to the record shape returned by the API."""
        return {
            "id": self.pk,
            "full_name": self.full_name,
            "email": self.email,
            "phone_number": self.phone_number,
            "service_type": self.service_type,
            "budget_range": self.budget_range,
            "project_description": self.project_description,
            "notification_sent": self.notification_sent,
            "notification_error": self.notification_error,
            "notification_response": self.notification_response,
            "notification_sent_at": self.notification_sent_at.isoformat() if self.notification_sent_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
