from __future__ import annotations
from pathlib import Path
import fitz
import typer

from numbering_cli.cli import _resolve_inputs, configure_logging, console
from pdf_lines.annotate import open_document
from pdf_lines.config import NumberingConfig
from pdf_lines.debug import annotate_pdf, dump_layout

app = typer.Typer(help="Debug entrypoint for PDF line reconstruction.")

@app.callback()
def main() -> None:
    """Keep `layout` as a real subcommand."""

@app.command("layout")
def debug_layout(
        input_path: str = typer.Argument(..., help="PDF to debug."),
        output: Path | None = typer.Option(
            None, "--output", "-o", help="Write debug output to file."
        ),
        columns: bool = typer.Option(
            False, "--columns", "-c", help="Reconstruct left and right page halves separately."
        ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-page details."),
) -> None:
    """Dump fragments and lines, and write an annotated PDF with line boxes."""
    configure_logging(verbose)
    pdf_paths = _resolve_inputs(input_path)
    config = NumberingConfig(columns=columns)
    outputs: list[str] = []

    for pdf_path in pdf_paths:
        if len(pdf_paths) > 1:
            outputs.append(f"=== {pdf_path} ===")

        try:
            with open_document(pdf_path) as doc:
                outputs.extend(dump_layout(doc, config))
            annotated = annotate_pdf(pdf_path, config=config)
        except (ValueError, fitz.FileDataError) as e:
            console.print(f"[red]Error: {pdf_path.name}: {e}[/red]")
            raise typer.Exit(1)
        outputs.append(f"\nAnnotated PDF: {annotated}")

    debug_output = "\n".join(outputs)
    if output is None:
        typer.echo(debug_output)
    else:
        output.write_text(debug_output, encoding="utf-8")
        typer.echo(f"Debug info written to {output}")

if __name__ == "__main__":
    app()
