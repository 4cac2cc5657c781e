from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .document import DocumentModel

# A4 in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 50.0
# Character-count proxy for the usable line width, not a glyph measurement.
WRAP_WIDTH = 70
TEXT_COLOR: Tuple[float, float, float] = (0.2, 0.2, 0.2)

BODY_FONT = "body"
BOLD_FONT = "bold"


@dataclass(frozen=True)
class BlockStyle:
    size: float
    line_gap: float
    font_role: str = BODY_FONT

    @property
    def advance(self) -> float:
        return self.size + self.line_gap


TITLE = BlockStyle(size=22, line_gap=10, font_role=BOLD_FONT)
SUBTITLE = BlockStyle(size=14, line_gap=12)
STYLE_LABEL = BlockStyle(size=10, line_gap=10)
BODY = BlockStyle(size=12, line_gap=6)


@dataclass(frozen=True)
class DrawInstruction:
    text: str
    style: BlockStyle


@dataclass(frozen=True)
class TextRun:
    text: str
    x: float
    y: float
    font_role: str
    size: float
    color: Tuple[float, float, float] = TEXT_COLOR


@dataclass
class RenderedPage:
    number: int
    runs: List[TextRun] = field(default_factory=list)


def wrap_text(text: str, width: int = WRAP_WIDTH) -> List[str]:
    """
    Greedy line fill over whitespace-separated words.

    A word longer than ``width`` is kept whole on its own line.
    """
    lines: List[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > width and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def build_instructions(document: DocumentModel, width: int = WRAP_WIDTH) -> List[DrawInstruction]:
    instructions = [DrawInstruction(document.title, TITLE)]
    if document.subtitle:
        instructions.append(DrawInstruction(document.subtitle, SUBTITLE))
    instructions.append(DrawInstruction(document.style_label, STYLE_LABEL))
    instructions.extend(DrawInstruction(line, BODY) for line in wrap_text(document.body, width))
    return instructions


def paginate(
    instructions: Iterable[DrawInstruction],
    page_height: float = PAGE_HEIGHT,
    margin: float = MARGIN,
) -> List[RenderedPage]:
    """
    Place instructions top to bottom in a single pass.

    The cursor starts at ``page_height - margin`` on page 1. A new page is
    opened only when the cursor has reached the bottom margin before a line
    is drawn; closed pages are never revisited.
    """
    top = page_height - margin
    pages = [RenderedPage(number=1)]
    cursor = top
    for instruction in instructions:
        if cursor <= margin:
            pages.append(RenderedPage(number=len(pages) + 1))
            cursor = top
        style = instruction.style
        pages[-1].runs.append(
            TextRun(
                text=instruction.text,
                x=margin,
                y=cursor,
                font_role=style.font_role,
                size=style.size,
            )
        )
        cursor -= style.advance
    return pages
