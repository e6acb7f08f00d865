from pathlib import Path

import fitz

from pdf_lines.annotate import iter_labels, open_document
from pdf_lines.config import NumberingConfig
from pdf_lines.layout import Region
from pdf_lines.source import get_fragments

REGION_COLORS = {
    Region.all: (0, 0, 1),
    Region.left: (0, 0, 1),
    Region.right: (1, 0, 0),
}


def annotate_pdf(pdf_path: Path, output_path: Path | None = None, config: NumberingConfig | None = None) -> Path:
    """Draw reconstructed line boxes, baselines and the column midpoint."""
    config = config or NumberingConfig()
    output_path = output_path or pdf_path.with_name(f"{pdf_path.stem}.annotated.pdf")
    with open_document(pdf_path) as doc:
        for page in doc:
            page_rect = page.rect
            labels = list(iter_labels(page, config))
            if config.columns:
                x_mid = page_rect.width / 2
                page.draw_line(
                    fitz.Point(x_mid, page_rect.y0),
                    fitz.Point(x_mid, page_rect.y1),
                    color=(0, 0.6, 0),
                    width=0.5,
                )

            for label in labels:
                color = REGION_COLORS[label.region]
                fragments = label.line.fragments
                # Back to PyMuPDF's top-left origin
                rect = fitz.Rect(
                    min(f.x for f in fragments),
                    page_rect.height - label.line.top,
                    max(f.x + f.width for f in fragments),
                    page_rect.height - min(f.y for f in fragments),
                )
                page.draw_rect(rect, color=color, width=0.5)
                y = page_rect.height - label.baseline
                page.draw_line(fitz.Point(rect.x0 - 4, y), fitz.Point(rect.x0, y), color=color, width=0.5)
                page.insert_text(
                    fitz.Point(rect.x1 + 2, y),
                    f"{label.number}@{label.baseline:.1f}",
                    fontsize=5,
                    color=color,
                )
        doc.save(str(output_path))
    return output_path


def dump_layout(doc: fitz.Document, config: NumberingConfig | None = None) -> list[str]:
    """Describe every page's fragments and numbered lines as text."""
    config = config or NumberingConfig()
    outputs: list[str] = []
    for page in doc:
        outputs.append(f"=== PAGE {page.number + 1} ({page.rect.width:.1f} x {page.rect.height:.1f}) ===")
        outputs.append("--- FRAGMENTS ---")
        for f in get_fragments(page):
            outputs.append(
                f"({f.x:.1f}, {f.y:.1f}) w={f.width:.1f} h={f.height:.1f} shear={f.shear}: {f.text!r}"
            )
        outputs.append("--- LINES ---")
        for label in iter_labels(page, config):
            outputs.append(
                f"[{label.region.value} {label.number}] y={label.baseline:.1f}"
                f" top={label.line.top:.1f}: {label.line.text}"
            )
    return outputs
