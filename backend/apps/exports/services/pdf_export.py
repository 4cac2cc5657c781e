from __future__ import annotations

import io
from typing import Dict, List

from reportlab.pdfgen import canvas

from .document import DocumentModel
from .layout import BODY_FONT, BOLD_FONT, PAGE_HEIGHT, PAGE_WIDTH, RenderedPage, build_instructions, paginate

# Standard Type 1 faces per customization font id; "handwritten" has no
# standard equivalent and renders with the serif pair.
PDF_FONT_FAMILIES: Dict[str, Dict[str, str]] = {
    "serif": {BODY_FONT: "Times-Roman", BOLD_FONT: "Times-Bold"},
    "sans": {BODY_FONT: "Helvetica", BOLD_FONT: "Helvetica-Bold"},
    "mono": {BODY_FONT: "Courier", BOLD_FONT: "Courier-Bold"},
}


class PdfExporter:
    content_type = "application/pdf"
    extension = "pdf"

    def render(self, document: DocumentModel) -> bytes:
        return self.render_pages(self.layout(document), document)

    def layout(self, document: DocumentModel) -> List[RenderedPage]:
        return paginate(build_instructions(document))

    def render_pages(self, pages: List[RenderedPage], document: DocumentModel) -> bytes:
        faces = PDF_FONT_FAMILIES.get(document.font_family, PDF_FONT_FAMILIES["serif"])
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
        pdf.setTitle(document.title)
        pdf.setSubject(document.style_label)

        for page in pages:
            for run in page.runs:
                pdf.setFont(faces[run.font_role], run.size)
                pdf.setFillColorRGB(*run.color)
                pdf.drawString(run.x, run.y, run.text)
            pdf.showPage()

        pdf.save()
        return buf.getvalue()
