from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_WHITESPACE_RUN = re.compile(r"\s+")
# characters encodeURIComponent leaves alone besides alphanumerics and "-_."
_URI_SAFE = "!~*'()"


class ExportError(Exception):
    """Raised when a byte stream could not be assembled."""


@dataclass(frozen=True)
class DocumentModel:
    title: str
    subtitle: Optional[str]
    style_label: str
    body: str
    paragraphs: List[str] = field(default_factory=list)
    font_family: str = "serif"


def split_paragraphs(draft: str) -> List[str]:
    if not draft:
        return []
    chunks = _PARAGRAPH_BREAK.split(draft)
    return [chunk.strip() for chunk in chunks if chunk.strip()]


def build_document(story: Dict[str, Any], draft: str, style: str) -> DocumentModel:
    customization = story.get("customization") or {}
    personal = story.get("personal") or {}
    subtitle = str(customization.get("subtitle") or "")
    return DocumentModel(
        title=str(customization.get("title") or personal.get("fullName") or "Autobiography"),
        subtitle=subtitle or None,
        style_label=f"Writing style: {style}",
        body=draft,
        paragraphs=split_paragraphs(draft),
        font_family=str(customization.get("primaryFont") or "serif"),
    )


def export_filename(story: Dict[str, Any], extension: str) -> str:
    title = str((story.get("customization") or {}).get("title") or "autobiography")
    return f"{_WHITESPACE_RUN.sub('-', title.lower())}.{extension}"


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{quote(filename, safe=_URI_SAFE)}"'
