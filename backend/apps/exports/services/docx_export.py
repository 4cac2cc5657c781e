from __future__ import annotations

import io

from docx import Document
from docx.shared import Pt, Twips

from .document import DocumentModel

DOCX_FONT_FAMILIES = {
    "serif": "Times New Roman",
    "sans": "Arial",
    "mono": "Courier New",
}
BODY_SIZE = Pt(12)
BODY_SPACE_AFTER = Twips(200)
STYLE_LABEL_SIZE = Pt(11)
STYLE_LABEL_SPACE_AFTER = Twips(300)


class DocxExporter:
    content_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    extension = "docx"

    def render(self, document: DocumentModel) -> bytes:
        font_name = DOCX_FONT_FAMILIES.get(document.font_family, DOCX_FONT_FAMILIES["serif"])

        d = Document()
        d.core_properties.title = document.title
        d.add_heading(document.title, level=0)
        if document.subtitle:
            d.add_heading(document.subtitle, level=3)

        label = d.add_paragraph()
        label_run = label.add_run(document.style_label)
        label_run.italic = True
        label_run.font.size = STYLE_LABEL_SIZE
        label.paragraph_format.space_after = STYLE_LABEL_SPACE_AFTER

        # Page breaks are left to the viewer.
        for text in document.paragraphs:
            paragraph = d.add_paragraph()
            run = paragraph.add_run(text)
            run.font.name = font_name
            run.font.size = BODY_SIZE
            paragraph.paragraph_format.space_after = BODY_SPACE_AFTER

        out = io.BytesIO()
        d.save(out)
        return out.getvalue()
