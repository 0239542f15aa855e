"""Initial migration for inquiries app - Inquiry model."""

from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Inquiry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("full_name", models.TextField()),
                ("email", models.TextField()),
                ("phone_number", models.TextField(blank=True, null=True)),
                ("service_type", models.TextField(blank=True, null=True)),
                ("budget_range", models.TextField(blank=True, null=True)),
                ("project_description", models.TextField(blank=True, null=True)),
                ("notification_sent", models.BooleanField(default=False)),
                ("notification_error", models.TextField(blank=True, null=True)),
                ("notification_response", models.TextField(blank=True, null=True)),
                ("notification_sent_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "inquiry",
                "verbose_name_plural": "inquiries",
                "db_table": "inquiries",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
