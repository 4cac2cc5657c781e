from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class WritingStyle(models.TextChoices):
    EMOTIONAL = "emotional", "Emotional"
    PROFESSIONAL = "professional", "Professional"
    SIMPLE = "simple", "Simple"
    POETIC = "poetic", "Poetic"


class Story(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="story",
    )
    personal_json = models.JSONField(default=dict, blank=True)
    sections_json = models.JSONField(default=dict, blank=True)
    timeline_json = models.JSONField(default=list, blank=True)
    drafts_json = models.JSONField(default=dict, blank=True)
    selected_style = models.CharField(max_length=16, choices=WritingStyle.choices, default=WritingStyle.EMOTIONAL)
    customization_json = models.JSONField(default=dict, blank=True)
    share_id = models.CharField(max_length=32, unique=True, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at"]
        verbose_name_plural = "stories"

    def __str__(self) -> str:
        title = (self.customization_json or {}).get("title") or "Untitled"
        return f"{title} ({self.id})"


class ShareSnapshot(models.Model):
    share_id = models.CharField(primary_key=True, max_length=32)
    story = models.ForeignKey(Story, on_delete=models.CASCADE, related_name="shares")
    title = models.TextField()
    draft = models.TextField(blank=True, default="")
    style = models.CharField(max_length=16, choices=WritingStyle.choices)
    personal_json = models.JSONField(default=dict, blank=True)
    customization_json = models.JSONField(default=dict, blank=True)
    timeline_json = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.title} [{self.share_id}]"
