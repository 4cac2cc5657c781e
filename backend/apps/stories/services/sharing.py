from __future__ import annotations

import logging
import secrets
from typing import Optional

from django.db import transaction
from django.utils import timezone

from apps.exports.services.document import split_paragraphs

from ..models import ShareSnapshot, Story
from .schemas import SharePayload
from .story import StoryService, require_style, story_title

logger = logging.getLogger(__name__)

SHARE_ID_BYTES = 9  # 12 url-safe characters


def new_share_id() -> str:
    return secrets.token_urlsafe(SHARE_ID_BYTES)


class ShareService:
    def __init__(self) -> None:
        self.stories = StoryService()

    def create_share_link(self, story: Story, draft: str, style: str) -> str:
        """
        Publish a read-only snapshot of ``story`` with ``draft`` in ``style``.

        A story keeps the share id it was first given, so sharing again
        overwrites the same snapshot with the newest draft and style.
        """
        draft = str(draft or "")
        if not draft.strip():
            raise ValueError("Missing draft")
        style = require_style(style)

        with transaction.atomic():
            locked = Story.objects.select_for_update().get(pk=story.pk)
            share_id = locked.share_id or new_share_id()
            if locked.share_id != share_id:
                locked.share_id = share_id
                locked.save(update_fields=["share_id", "updated_at"])

            payload = self.stories.update(locked, {"storyDrafts": {style: draft}, "selectedStyle": style})
            ShareSnapshot.objects.update_or_create(
                share_id=share_id,
                defaults={
                    "story": locked,
                    "title": story_title(payload),
                    "draft": draft,
                    "style": style,
                    "personal_json": payload["personal"],
                    "customization_json": payload["customization"],
                    "timeline_json": payload["timeline"],
                    "created_at": timezone.now(),
                },
            )

        story.share_id = share_id
        logger.info("Published share snapshot %s for story %s", share_id, story.pk)
        return share_id

    def get_share_snapshot(self, share_id: str) -> Optional[SharePayload]:
        snapshot = ShareSnapshot.objects.filter(share_id=share_id).first()
        if snapshot is None:
            return None
        return self.to_payload(snapshot)

    def to_payload(self, snapshot: ShareSnapshot) -> SharePayload:
        return {
            "shareId": snapshot.share_id,
            "storyId": str(snapshot.story_id),
            "title": snapshot.title,
            "draft": snapshot.draft,
            "paragraphs": split_paragraphs(snapshot.draft),
            "createdAt": snapshot.created_at.isoformat(),
            "style": snapshot.style,
            "personal": snapshot.personal_json or {},
            "customization": snapshot.customization_json or {},
            "timeline": snapshot.timeline_json or [],
        }
