from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Union

from apps.stories.services.story import normalize_story, require_style

from .docx_export import DocxExporter
from .document import ExportError, build_document, content_disposition, export_filename
from .pdf_export import PdfExporter

logger = logging.getLogger(__name__)

Exporter = Union[PdfExporter, DocxExporter]


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    filename: str
    content_type: str

    @property
    def content_disposition(self) -> str:
        return content_disposition(self.filename)


class ExportService:
    exporters: Dict[str, Exporter] = {
        "pdf": PdfExporter(),
        "docx": DocxExporter(),
    }

    def export(self, export_format: str, payload: Dict[str, Any] | Any) -> ExportResult:
        """
        Render ``{story, draft, style}`` into a complete byte stream.

        Raises ``ValueError`` for unusable input and ``ExportError`` when the
        document could not be serialized. Nothing is returned on failure.
        """
        exporter = self.exporters.get(export_format)
        if exporter is None:
            raise ValueError(f"export format must be one of: {' | '.join(self.exporters)}")

        payload = payload if isinstance(payload, dict) else {}
        story = payload.get("story")
        draft = payload.get("draft")
        if not story or not draft or not isinstance(draft, str):
            raise ValueError("Missing story or draft")

        # The merged copy only validates the shape and supplies selectedStyle;
        # title, subtitle and filename fall back from what the client sent.
        normalized = normalize_story(story)
        style = require_style(payload.get("style") or normalized["selectedStyle"])
        document = build_document(story, draft, style)

        try:
            content = exporter.render(document)
        except Exception as exc:
            raise ExportError(f"{export_format} serialization failed") from exc
        if not content:
            raise ExportError(f"{export_format} serialization produced no output")

        logger.info(
            "Rendered %s export (%d bytes, %d paragraphs, style=%s)",
            export_format,
            len(content),
            len(document.paragraphs),
            style,
        )
        return ExportResult(
            content=content,
            filename=export_filename(story, exporter.extension),
            content_type=exporter.content_type,
        )
