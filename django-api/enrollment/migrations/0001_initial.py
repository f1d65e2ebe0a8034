import uuid

import django.db.models.functions.text
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("location", models.CharField(max_length=255)),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("registration_deadline", models.DateTimeField()),
                ("capacity", models.PositiveIntegerField(default=0)),
                ("fee", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("is_draft", models.BooleanField(default=False)),
                ("images", models.JSONField(blank=True, default=list)),
                ("payment_ref", models.CharField(blank=True, max_length=255, null=True)),
                ("waiver_templates", models.JSONField(blank=True, default=list)),
                ("registered_users", models.JSONField(blank=True, default=list)),
                ("registered_children", models.JSONField(blank=True, default=list)),
                ("revision", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["starts_at"],
                "indexes": [models.Index(fields=["starts_at"], name="enrollment_event_starts_idx")],
            },
        ),
        migrations.CreateModel(
            name="WaiverTemplate",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("document_key", models.CharField(max_length=512)),
                ("document_url", models.URLField(max_length=1000)),
                ("version", models.PositiveIntegerField(default=1)),
                ("archived", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "ordering": ["created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("name"),
                        condition=models.Q(("archived", False)),
                        name="unique_active_waiver_name",
                    )
                ],
            },
        ),
    ]
