from __future__ import annotations

import logging
import uuid
from copy import deepcopy
from typing import Any, Dict, List

from django.db import transaction

from ..models import Story, WritingStyle
from .schemas import StoryPayload, TimelineEvent

logger = logging.getLogger(__name__)

STYLE_TAGS = tuple(WritingStyle.values)
SECTION_KEYS = ("childhood", "education", "career", "relationships", "challenges", "dreams")
SECTION_TITLES = {
    "childhood": "Childhood",
    "education": "Education",
    "career": "Career",
    "relationships": "Family & Relationships",
    "challenges": "Challenges & Lessons",
    "dreams": "Dreams & Future",
}

_PERSONAL_DEFAULTS = {"fullName": "", "dateOfBirth": "", "birthplace": "", "background": ""}
_CUSTOMIZATION_DEFAULTS = {
    "title": "My Autobiography",
    "subtitle": "A journey of growth",
    "coverImage": "",
    "primaryFont": "serif",
    "quote": "",
}
_EVENT_FIELDS = ("title", "date", "description")
_OPTIONAL_EVENT_FIELDS = ("imageUrl", "notes")


class TimelineEventNotFound(LookupError):
    pass


def empty_story() -> StoryPayload:
    story: Dict[str, Any] = {
        "personal": dict(_PERSONAL_DEFAULTS),
        "timeline": [],
        "storyDrafts": {style: "" for style in STYLE_TAGS},
        "selectedStyle": WritingStyle.EMOTIONAL.value,
        "customization": dict(_CUSTOMIZATION_DEFAULTS),
    }
    for key in SECTION_KEYS:
        story[key] = {"summary": "", "highlights": [""]}
    return story  # type: ignore[return-value]


def merge_story(base: Dict[str, Any], updates: Dict[str, Any] | Any) -> StoryPayload:
    """
    Apply a partial story update on top of ``base``.

    Later values win field by field. Nested objects merge key by key and
    arrays (highlights, timeline) are replaced wholesale. Keys outside the
    story shape, plus the server-owned ``lastUpdated``/``shareableId``, are
    ignored.
    """
    if not isinstance(updates, dict):
        raise ValueError("story must be an object")

    merged: Dict[str, Any] = deepcopy(base)
    for key, value in updates.items():
        if key in ("personal", "customization", "storyDrafts"):
            merged[key] = _merge_strings(merged[key], value, key)
        elif key in SECTION_KEYS:
            merged[key] = _merge_section(merged[key], value, key)
        elif key == "timeline":
            merged[key] = normalize_timeline(value)
        elif key == "selectedStyle":
            merged[key] = require_style(value, "selectedStyle")
    return merged  # type: ignore[return-value]


def normalize_story(payload: Dict[str, Any] | Any) -> StoryPayload:
    """Complete a possibly partial story payload against the defaults."""
    story = merge_story(empty_story(), payload)
    for key in ("lastUpdated", "shareableId"):
        value = payload.get(key) if isinstance(payload, dict) else None
        if isinstance(value, str) and value.strip():
            story[key] = value.strip()  # type: ignore[literal-required]
    return story


def require_style(value: Any, field: str = "style") -> str:
    style = str(value or "").strip().lower()
    if style not in STYLE_TAGS:
        raise ValueError(f"{field} must be one of: {' | '.join(STYLE_TAGS)}")
    return style


def story_title(story: Dict[str, Any]) -> str:
    customization = story.get("customization") or {}
    personal = story.get("personal") or {}
    return str(customization.get("title") or personal.get("fullName") or "Autobiography")


def new_event_id() -> str:
    return uuid.uuid4().hex


def normalize_timeline(value: Any) -> List[TimelineEvent]:
    if not isinstance(value, list):
        raise ValueError("timeline must be an array")
    events: List[TimelineEvent] = []
    seen: set[str] = set()
    for item in value:
        if not isinstance(item, dict):
            raise ValueError("timeline event must be an object")
        event_id = str(item.get("id") or "").strip()
        if not event_id or event_id in seen:
            event_id = new_event_id()
        seen.add(event_id)
        events.append(normalize_event(item, event_id))
    return events


def normalize_event(data: Dict[str, Any], event_id: str) -> TimelineEvent:
    event: Dict[str, Any] = {"id": event_id}
    for field in _EVENT_FIELDS:
        event[field] = _as_text(data.get(field))
    for field in _OPTIONAL_EVENT_FIELDS:
        if data.get(field) is not None:
            event[field] = _as_text(data.get(field))
    return event  # type: ignore[return-value]


def _merge_strings(current: Dict[str, str], value: Any, field: str) -> Dict[str, str]:
    if not isinstance(value, dict):
        raise ValueError(f"{field} must be an object")
    out = dict(current)
    for key, item in value.items():
        if key in out:
            out[key] = _as_text(item)
    return out


def _merge_section(current: Dict[str, Any], value: Any, field: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{field} must be an object")
    out = {"summary": current.get("summary", ""), "highlights": list(current.get("highlights", []))}
    if "summary" in value:
        out["summary"] = _as_text(value["summary"])
    if "highlights" in value:
        highlights = value["highlights"]
        if not isinstance(highlights, list):
            raise ValueError(f"{field}.highlights must be an array")
        out["highlights"] = [_as_text(item) for item in highlights]
    return out


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


class StoryService:
    """Persistence for the per-user story record."""

    def get_or_create(self, user) -> Story:
        story, created = Story.objects.get_or_create(owner=user, defaults=self._columns(empty_story()))
        if created:
            logger.info("Created default story for user %s", user.pk)
        return story

    def to_payload(self, story: Story) -> StoryPayload:
        stored: Dict[str, Any] = {
            "personal": story.personal_json or {},
            "timeline": story.timeline_json or [],
            "storyDrafts": story.drafts_json or {},
            "customization": story.customization_json or {},
        }
        if story.selected_style in STYLE_TAGS:
            stored["selectedStyle"] = story.selected_style
        sections = story.sections_json if isinstance(story.sections_json, dict) else {}
        for key in SECTION_KEYS:
            if isinstance(sections.get(key), dict):
                stored[key] = sections[key]

        payload = merge_story(empty_story(), stored)
        if story.updated_at:
            payload["lastUpdated"] = story.updated_at.isoformat()
        if story.share_id:
            payload["shareableId"] = story.share_id
        return payload

    def update(self, story: Story, updates: Dict[str, Any] | Any) -> StoryPayload:
        with transaction.atomic():
            locked = Story.objects.select_for_update().get(pk=story.pk)
            payload = merge_story(self.to_payload(locked), updates)
            self._store(locked, payload)
        return self.to_payload(locked)

    def add_timeline_event(self, story: Story, data: Dict[str, Any]) -> TimelineEvent:
        event = normalize_event(data, new_event_id())
        with transaction.atomic():
            locked = Story.objects.select_for_update().get(pk=story.pk)
            payload = self.to_payload(locked)
            payload["timeline"] = list(payload["timeline"]) + [event]
            self._store(locked, payload)
        return event

    def update_timeline_event(self, story: Story, event_id: str, data: Dict[str, Any]) -> TimelineEvent:
        with transaction.atomic():
            locked = Story.objects.select_for_update().get(pk=story.pk)
            payload = self.to_payload(locked)
            timeline = list(payload["timeline"])
            for index, event in enumerate(timeline):
                if event["id"] == event_id:
                    merged = {**event, **{k: v for k, v in data.items() if k != "id"}}
                    timeline[index] = normalize_event(merged, event_id)
                    break
            else:
                raise TimelineEventNotFound(event_id)
            payload["timeline"] = timeline
            self._store(locked, payload)
        return timeline[index]

    def delete_timeline_event(self, story: Story, event_id: str) -> None:
        with transaction.atomic():
            locked = Story.objects.select_for_update().get(pk=story.pk)
            payload = self.to_payload(locked)
            remaining = [event for event in payload["timeline"] if event["id"] != event_id]
            if len(remaining) == len(payload["timeline"]):
                raise TimelineEventNotFound(event_id)
            payload["timeline"] = remaining
            self._store(locked, payload)

    def update_draft(self, story: Story, style: str, content: str) -> StoryPayload:
        style = require_style(style)
        return self.update(story, {"storyDrafts": {style: content}, "selectedStyle": style})

    def _store(self, story: Story, payload: Dict[str, Any]) -> None:
        for field, value in self._columns(payload).items():
            setattr(story, field, value)
        story.save(
            update_fields=[
                "personal_json",
                "sections_json",
                "timeline_json",
                "drafts_json",
                "selected_style",
                "customization_json",
                "updated_at",
            ]
        )

    def _columns(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "personal_json": payload["personal"],
            "sections_json": {key: payload[key] for key in SECTION_KEYS},
            "timeline_json": payload["timeline"],
            "drafts_json": payload["storyDrafts"],
            "selected_style": payload["selectedStyle"],
            "customization_json": payload["customization"],
        }
