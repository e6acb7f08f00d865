import glob
import logging
from pathlib import Path

log = logging.getLogger(__name__)

GLOB_CHARS = ("*", "?", "[")


def resolve_pdf_inputs(input_path: str) -> list[Path]:
    """Expand a PDF file, a folder of PDFs or a glob pattern into sorted PDF paths."""
    if any(char in input_path for char in GLOB_CHARS):
        candidates = [Path(path) for path in glob.glob(input_path)]
    elif (path := Path(input_path)).is_dir():
        # Folder mode takes .PDF as well as .pdf
        candidates = list(path.iterdir())
    else:
        candidates = [path]

    pdfs: list[Path] = []
    for candidate in sorted(candidates):
        if candidate.is_file() and candidate.suffix.lower() == ".pdf":
            pdfs.append(candidate)
        elif candidate.is_file():
            log.debug("skipping non-PDF %s", candidate)

    if not pdfs:
        raise ValueError(f"No PDF files found for input: {input_path}")
    return pdfs
