from __future__ import annotations

import logging
from typing import Any, Dict

from celery import shared_task

from .models import Story
from .services.drafts import DraftService
from .services.story import StoryService

logger = logging.getLogger(__name__)


@shared_task
def generate_story_draft(story_id: str, style: str) -> Dict[str, Any]:
    story = Story.objects.filter(id=story_id).first()
    if not story:
        return {"status": "error", "error": "story_not_found"}

    stories = StoryService()
    try:
        result = DraftService().generate(stories.to_payload(story), style)
        stories.update_draft(story, style, result["draft"])
    except Exception as exc:
        logger.error("Draft generation failed for story %s", story_id, exc_info=True)
        return {"status": "error", "error": str(exc)[:2000] or "Draft generation failed"}
    return {"status": "ok", "provider": result["provider"]}
