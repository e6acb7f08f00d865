from __future__ import annotations

import logging
from pathlib import Path

import fitz
import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from numbering_cli.utils import resolve_pdf_inputs
from pdf_lines.annotate import default_output_path, iter_labels, number_document, open_document
from pdf_lines.config import NumberingConfig

app = typer.Typer(help="Add line numbers to PDF pages.")
console = Console()

LINE_HEADERS = ["page", "column", "label", "baseline", "top", "fragments", "text"]


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_inputs(input_path: str) -> list[Path]:
    try:
        return resolve_pdf_inputs(input_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _process_pdf(pdf_path: Path, output_path: Path, config: NumberingConfig) -> tuple[int, int]:
    """Number one PDF and return (pages, labels)."""
    with open_document(pdf_path) as doc:
        labels = number_document(doc, config)
        pages = doc.page_count
        doc.save(str(output_path))
    return pages, labels


@app.command("number")
def number_pdfs(
        input_path: str = typer.Argument(..., help="PDF file, folder, or glob pattern."),
        output: Path | None = typer.Option(
            None, "--output", "-o", help="Output PDF (default: <name>.line-numbered.pdf)."
        ),
        columns: bool = typer.Option(
            False, "--columns", "-c", help="Number left and right page halves separately."
        ),
        restart_right: bool = typer.Option(
            False, "--restart-right", help="Restart numbering at 1 in the right column."
        ),
        font_size: float = typer.Option(8.0, "--font-size", help="Label font size in points."),
        left_margin: float = typer.Option(5.0, "--left-margin", help="Label x from the left edge."),
        right_margin: float = typer.Option(
            15.0, "--right-margin", help="Right column label x from the right edge."
        ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-page details."),
) -> None:
    """Write a copy of each PDF with a number beside every text line."""
    configure_logging(verbose)
    pdf_paths = _resolve_inputs(input_path)
    if output is not None and len(pdf_paths) > 1:
        raise typer.BadParameter("--output only works with a single input PDF.")

    config = NumberingConfig(
        columns=columns,
        continue_right=not restart_right,
        font_size=font_size,
        left_margin=left_margin,
        right_margin=right_margin,
    )

    table = Table(title="Line Numbering")
    table.add_column("File", style="blue")
    table.add_column("Status")
    table.add_column("Details")

    failed = False
    for pdf_path in pdf_paths:
        output_path = output or default_output_path(pdf_path)
        try:
            pages, labels = _process_pdf(pdf_path, output_path, config)
        except (ValueError, fitz.FileDataError) as e:
            failed = True
            table.add_row(pdf_path.name, "[red]ERROR[/red]", str(e))
            continue
        table.add_row(
            pdf_path.name,
            "[green]OK[/green]",
            f"{pages} pages, {labels} lines -> {output_path}",
        )

    console.print(table)
    if failed:
        raise typer.Exit(1)


@app.command("lines")
def show_lines(
        input_path: str = typer.Argument(..., help="PDF file to inspect."),
        columns: bool = typer.Option(
            False, "--columns", "-c", help="Reconstruct left and right page halves separately."
        ),
        restart_right: bool = typer.Option(
            False, "--restart-right", help="Restart numbering at 1 in the right column."
        ),
        csv: Path | None = typer.Option(None, "--csv", help="Also write the lines to a CSV file."),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-page details."),
) -> None:
    """Print the reconstructed lines of a PDF with their labels and baselines."""
    configure_logging(verbose)
    pdf_paths = _resolve_inputs(input_path)
    if len(pdf_paths) > 1:
        raise typer.BadParameter("Only one input PDF is supported.")
    pdf_path = pdf_paths[0]
    config = NumberingConfig(columns=columns, continue_right=not restart_right)

    try:
        with open_document(pdf_path) as doc:
            rows = [
                [
                    label.page,
                    label.region.value,
                    label.number,
                    round(label.baseline, 2),
                    round(label.line.top, 2),
                    len(label.line.fragments),
                    label.line.text,
                ]
                for page in doc
                for label in iter_labels(page, config)
            ]
    except (ValueError, fitz.FileDataError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Lines for {pdf_path.name}")
    table.add_column("Page", justify="right", style="cyan")
    table.add_column("Column", style="magenta")
    table.add_column("#", justify="right", style="green")
    table.add_column("Baseline", justify="right")
    table.add_column("Top", justify="right")
    table.add_column("Frags", justify="right", style="yellow")
    table.add_column("Text")
    for row in rows:
        table.add_row(*[f"{value:.2f}" if isinstance(value, float) else escape(str(value)) for value in row])
    console.print(table)

    if csv is not None:
        pd.DataFrame(rows, columns=LINE_HEADERS).to_csv(csv, index=False)
        console.print(f"[green]Wrote {len(rows)} lines to {csv}[/green]")


if __name__ == "__main__":
    app()
