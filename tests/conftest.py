"""Shared fixtures: small real PDFs built with PyMuPDF."""

import fitz
import pytest


def write_pdf(path, pages):
    """Write a PDF where each page is a list of (x, y_from_top, text) entries."""
    doc = fitz.open()
    for entries in pages:
        page = doc.new_page(width=612, height=792)
        for x, y, text in entries:
            page.insert_text(fitz.Point(x, y), text, fontsize=12)
    doc.save(path)
    doc.close()
    return path


@pytest.fixture
def sample_pdf(tmp_path):
    return write_pdf(
        tmp_path / "sample.pdf",
        [
            [(72, 100, "First line of text"), (72, 130, "Second line here")],
            [(72, 100, "Another page")],
        ],
    )


@pytest.fixture
def two_column_pdf(tmp_path):
    return write_pdf(
        tmp_path / "columns.pdf",
        [[
            (72, 100, "Left top"),
            (72, 130, "Left bottom"),
            (350, 100, "Right top"),
        ]],
    )


@pytest.fixture
def label_spans():
    """Return a reader of (page, text, origin_y) for spans in the page margins."""
    return _label_spans


def _label_spans(pdf_path, max_x=20):
    found = []
    with fitz.open(pdf_path) as doc:
        for page in doc:
            for block in page.get_text("dict")["blocks"]:
                for line in block.get("lines", []):
                    for span in line["spans"]:
                        x, y = span["origin"]
                        if x < max_x or x > 612 - max_x:
                            found.append((page.number + 1, span["text"].strip(), round(y)))
    return found
