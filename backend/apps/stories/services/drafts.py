from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from openai import OpenAI

from .schemas import DraftResult
from .story import SECTION_KEYS, SECTION_TITLES, normalize_story, require_style

logger = logging.getLogger(__name__)


STYLE_TONES = {
    "emotional": (
        "Write in a heartfelt, intimate voice that emphasizes emotions, vulnerability, and sensory details."
    ),
    "professional": (
        "Write in an articulate, polished voice suitable for publication or professional audiences."
    ),
    "simple": "Write in a clear, friendly, and accessible tone that any reader can understand.",
    "poetic": (
        "Write with lyrical flow, metaphors, and rhythmic language that feels poetic and reflective."
    ),
}

DEFAULT_PARAGRAPH = (
    "Your memories are almost ready to bloom. Add more detail in each section, "
    "then regenerate for a richer narrative."
)

_DRAFT_SCHEMA = """{
  "draft": "<the full autobiography chapter; separate paragraphs with a blank line>"
}"""

_JSON_RULE = (
    "OUTPUT RULE: Return a single valid JSON object - no markdown fences, "
    "no prose before or after, no trailing commas, no comments."
)

_FALLBACK_BLOCKS = (
    ("Roots", ("personal", "background")),
    ("Childhood", ("childhood", "summary")),
    ("Education", ("education", "summary")),
    ("Career", ("career", "summary")),
    ("Relationships", ("relationships", "summary")),
    ("Challenges", ("challenges", "summary")),
    ("Dreams", ("dreams", "summary")),
)


def build_prompt(story: Dict[str, Any], style: str) -> str:
    personal = story["personal"]
    blocks = [
        "You are an expert autobiographical writer. Using the structured notes below, craft a "
        f"cohesive autobiography chapter in the {style.upper()} style.",
        STYLE_TONES[style],
        "Focus on narrative flow, transitions between periods of life, and reflective insights. "
        "Sprinkle in details from the timeline where appropriate. Write in first person.",
        "\n".join(
            [
                "### Personal Information",
                f"Name: {personal['fullName']}",
                f"Date of birth: {personal['dateOfBirth']}",
                f"Birthplace: {personal['birthplace']}",
                f"Background: {personal['background']}",
            ]
        ),
    ]
    blocks.extend(_highlight_section(SECTION_TITLES[key], story[key]) for key in SECTION_KEYS)
    blocks.append("### Timeline\n" + (_timeline_text(story["timeline"]) or "No timeline events provided."))
    blocks.append(
        "Instructions:\n"
        "- Produce 6-8 paragraphs.\n"
        "- Open with a compelling scene or reflection.\n"
        "- Close with forward-looking sentiments tied to dreams and beliefs."
    )
    return "\n\n".join(blocks)


def fallback_draft(story: Dict[str, Any], style: str) -> str:
    paragraphs: List[str] = []
    for title, (section, field) in _FALLBACK_BLOCKS:
        text = str(story[section].get(field, ""))
        if text.strip():
            paragraphs.append(f"{title}: {text}")
    heading = f"({style.capitalize()} draft) {story['personal']['fullName'] or 'My story'}"
    body = "\n\n".join(paragraphs) if paragraphs else DEFAULT_PARAGRAPH
    return f"{heading}\n\n{body}"


def _highlight_section(title: str, section: Dict[str, Any]) -> str:
    highlights = [item for item in section.get("highlights", []) if item]
    numbered = "\n".join(f"{index}. {item}" for index, item in enumerate(highlights, start=1))
    return f"### {title}\nSummary: {section.get('summary', '')}\nHighlights:\n{numbered}".rstrip()


def _timeline_text(timeline: List[Dict[str, Any]]) -> str:
    lines = []
    for index, event in enumerate(timeline, start=1):
        line = f"{index}. {event['title']} ({event['date'] or 'undated'}) - {event['description']}"
        if event.get("notes"):
            line += f" | Notes: {event['notes']}"
        lines.append(line)
    return "\n".join(lines)


class DraftService:
    """
    Draft generator with a deterministic fallback.

    Without an API key, or when every model attempt fails, ``generate``
    returns the fallback draft so callers always get text back.
    """

    def __init__(self) -> None:
        self.model = settings.OPENAI_MODEL
        self.temperature = settings.STORY_DRAFT_TEMPERATURE
        self.max_retries = settings.STORY_DRAFT_JSON_RETRIES
        self._client: Optional[OpenAI] = None
        if getattr(settings, "OPENAI_API_KEY", ""):
            try:
                self._client = OpenAI(api_key=settings.OPENAI_API_KEY)
            except Exception:
                logger.warning("Failed to initialise OpenAI client", exc_info=True)

    def generate(self, story: Dict[str, Any] | Any, style: str) -> DraftResult:
        style = require_style(style)
        normalized = normalize_story(story)
        if self._client is not None:
            payload = self._call_json(
                system_prompt=_JSON_RULE + "\nRespond with this schema:\n" + _DRAFT_SCHEMA,
                user_prompt=build_prompt(normalized, style),
            )
            draft = str((payload or {}).get("draft", "")).strip()
            if draft:
                return {"draft": draft, "provider": "openai"}
            logger.info("Model returned no usable draft; using fallback for style=%s", style)
        return {"draft": fallback_draft(normalized, style), "provider": "fallback"}

    def _call_json(self, system_prompt: str, user_prompt: str) -> Optional[Dict[str, Any]]:
        if not self._client:
            return None

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        for attempt in range(self.max_retries + 1):
            try:
                response = self._client.chat.completions.create(
                    model=self.model,
                    temperature=self.temperature,
                    response_format={"type": "json_object"},
                    messages=messages,
                )
                content = response.choices[0].message.content or "{}"
                payload = json.loads(content)
                if isinstance(payload, dict):
                    return payload
            except Exception:
                logger.warning("Draft JSON call failed (attempt %d)", attempt + 1, exc_info=True)

            messages.append(
                {
                    "role": "user",
                    "content": (
                        "Your previous response was not valid JSON. "
                        "Return only the corrected JSON object."
                    ),
                }
            )
        return None
