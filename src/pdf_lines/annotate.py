import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import fitz

from pdf_lines.config import NumberingConfig
from pdf_lines.layout import Line, Region, iter_baselines, reconstruct_lines
from pdf_lines.source import get_fragments, get_page_width

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineLabel:
    """One line number as drawn (or to be drawn) on a page."""
    page: int
    region: Region
    number: int
    x: float
    baseline: float
    line: Line


def open_document(pdf_path: Path | str) -> fitz.Document:
    """Open a PDF for numbering, refusing password-protected files."""
    doc = fitz.open(pdf_path)
    if doc.needs_pass:
        doc.close()
        raise ValueError(f"{pdf_path} is encrypted; remove the password first.")
    return doc


def default_output_path(pdf_path: Path) -> Path:
    return pdf_path.with_name(f"{pdf_path.stem}.line-numbered.pdf")


def number_document(doc: fitz.Document, config: NumberingConfig | None = None) -> int:
    """Draw line numbers on every page in order and return how many were drawn."""
    config = config or NumberingConfig()
    total = 0
    for page in doc:
        labels = list(iter_labels(page, config))
        for label in labels:
            draw_label(page, label, config)
        log.debug("page=%d labels=%d", page.number + 1, len(labels))
        total += len(labels)
    return total


def iter_labels(page: fitz.Page, config: NumberingConfig) -> Iterator[LineLabel]:
    """Yield the labels for one page, left column before right in column mode."""
    fragments = get_fragments(page)
    page_width = get_page_width(page)
    page_number = page.number + 1

    if not config.columns:
        lines = reconstruct_lines(fragments, page_width, Region.all, config.layout)
        yield from _label_lines(page_number, Region.all, lines, 1, config.left_margin)
        return

    left = reconstruct_lines(fragments, page_width, Region.left, config.layout)
    counter = 1
    for label in _label_lines(page_number, Region.left, left, counter, config.left_margin):
        counter = label.number + 1
        yield label

    right = reconstruct_lines(fragments, page_width, Region.right, config.layout)
    start = counter if config.continue_right else 1
    x = page_width - config.right_margin
    yield from _label_lines(page_number, Region.right, right, start, x)


def _label_lines(
        page: int, region: Region, lines: Iterable[Line], start: int, x: float
) -> Iterator[LineLabel]:
    for number, (line, baseline) in enumerate(iter_baselines(lines), start=start):
        yield LineLabel(page, region, number, x, baseline, line)


def draw_label(page: fitz.Page, label: LineLabel, config: NumberingConfig) -> None:
    """Write the label number at its x and baseline."""
    # PyMuPDF measures y from the top edge
    point = fitz.Point(label.x, page.rect.height - label.baseline)
    page.insert_text(
        point,
        str(label.number),
        fontsize=config.font_size,
        fontname=config.font_name,
        color=config.color,
    )
