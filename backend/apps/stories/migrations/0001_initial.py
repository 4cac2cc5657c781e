import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Story",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("personal_json", models.JSONField(blank=True, default=dict)),
                ("sections_json", models.JSONField(blank=True, default=dict)),
                ("timeline_json", models.JSONField(blank=True, default=list)),
                ("drafts_json", models.JSONField(blank=True, default=dict)),
                (
                    "selected_style",
                    models.CharField(
                        choices=[
                            ("emotional", "Emotional"),
                            ("professional", "Professional"),
                            ("simple", "Simple"),
                            ("poetic", "Poetic"),
                        ],
                        default="emotional",
                        max_length=16,
                    ),
                ),
                ("customization_json", models.JSONField(blank=True, default=dict)),
                ("share_id", models.CharField(blank=True, max_length=32, null=True, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="story",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-updated_at"],
                "verbose_name_plural": "stories",
            },
        ),
        migrations.CreateModel(
            name="ShareSnapshot",
            fields=[
                ("share_id", models.CharField(max_length=32, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("draft", models.TextField(blank=True, default="")),
                (
                    "style",
                    models.CharField(
                        choices=[
                            ("emotional", "Emotional"),
                            ("professional", "Professional"),
                            ("simple", "Simple"),
                            ("poetic", "Poetic"),
                        ],
                        max_length=16,
                    ),
                ),
                ("personal_json", models.JSONField(blank=True, default=dict)),
                ("customization_json", models.JSONField(blank=True, default=dict)),
                ("timeline_json", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "story",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shares",
                        to="stories.story",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
