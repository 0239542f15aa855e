"""Custom user model for inquiry administrators."""

from typing import ClassVar

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class AdminUserManager(UserManager):
    """Custom user manager with email-based user creation."""

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        """Create a superuser with email as username if username not provided."""
        if not username and email:
            username = email
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """An account that can obtain an admin API token."""

    email = models.EmailField("email address", unique=True)
    is_admin = models.BooleanField(
        "admin status",
        default=False,
        help_text="Designates whether the user can list and delete inquiries through the API.",
    )

    objects = AdminUserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering: ClassVar[list[str]] = ["-date_joined"]

    def __str__(self) -> str:
        return self.email or self.username
