from typing import List

import fitz

from pdf_lines.layout import Fragment


def get_fragments(page: fitz.Page) -> List[Fragment]:
    """Read every text span on the page as a fragment in bottom-up coordinates."""
    page_height = page.rect.height
    fragments: List[Fragment] = []
    for block in page.get_text("dict")["blocks"]:
        # Image blocks carry no "lines"
        for line in block.get("lines", []):
            _, sin = line["dir"]
            for span in line["spans"]:
                fragments.append(_to_fragment(span, sin, page_height))
    return fragments


def get_page_width(page: fitz.Page) -> float:
    return page.rect.width


def _to_fragment(span: dict, sin: float, page_height: float) -> Fragment:
    x0, _, x1, _ = span["bbox"]
    origin_x, origin_y = span["origin"]
    size = span["size"]
    return Fragment(
        text=span["text"],
        x=origin_x,
        y=page_height - origin_y,
        width=x1 - x0,
        height=size,
        shear=(-size * sin, size * sin),
    )
