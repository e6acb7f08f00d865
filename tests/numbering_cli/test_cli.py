import fitz
import pandas as pd
from typer.testing import CliRunner

from numbering_cli.cli import app
from numbering_cli.debug_cli import app as debug_app

runner = CliRunner()


def test_number_writes_labels_next_to_each_line(sample_pdf, label_spans) -> None:
    result = runner.invoke(app, ["number", str(sample_pdf)])

    assert result.exit_code == 0, result.output
    output = sample_pdf.with_name("sample.line-numbered.pdf")
    assert output.exists()
    assert sorted(label_spans(output)) == [(1, "1", 100), (1, "2", 130), (2, "1", 100)]


def test_number_custom_output(sample_pdf, tmp_path) -> None:
    target = tmp_path / "out.pdf"
    result = runner.invoke(app, ["number", str(sample_pdf), "-o", str(target)])

    assert result.exit_code == 0, result.output
    assert target.exists()


def test_number_columns_continue(two_column_pdf, label_spans) -> None:
    result = runner.invoke(app, ["number", str(two_column_pdf), "--columns"])

    assert result.exit_code == 0, result.output
    output = two_column_pdf.with_name("columns.line-numbered.pdf")
    assert sorted(label_spans(output)) == [(1, "1", 100), (1, "2", 130), (1, "3", 100)]


def test_number_columns_restart(two_column_pdf, label_spans) -> None:
    result = runner.invoke(app, ["number", str(two_column_pdf), "--columns", "--restart-right"])

    assert result.exit_code == 0, result.output
    output = two_column_pdf.with_name("columns.line-numbered.pdf")
    assert sorted(label_spans(output)) == [(1, "1", 100), (1, "1", 100), (1, "2", 130)]


def test_number_rejects_output_with_many_inputs(sample_pdf, two_column_pdf, tmp_path) -> None:
    result = runner.invoke(app, ["number", str(tmp_path), "-o", str(tmp_path / "out.pdf")])

    assert result.exit_code != 0
    assert not (tmp_path / "out.pdf").exists()


def test_number_reports_broken_and_encrypted_files(tmp_path) -> None:
    (tmp_path / "broken.pdf").write_bytes(b"this is not a pdf")
    doc = fitz.open()
    doc.new_page().insert_text(fitz.Point(72, 72), "secret")
    doc.save(
        tmp_path / "locked.pdf",
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="owner",
        user_pw="user",
    )
    doc.close()

    result = runner.invoke(app, ["number", str(tmp_path)])

    assert result.exit_code == 1
    assert "ERROR" in result.output
    assert not (tmp_path / "locked.line-numbered.pdf").exists()


def test_number_missing_input(tmp_path) -> None:
    result = runner.invoke(app, ["number", str(tmp_path / "missing.pdf")])
    assert result.exit_code != 0


def test_lines_writes_csv(sample_pdf, tmp_path) -> None:
    csv_path = tmp_path / "lines.csv"
    result = runner.invoke(app, ["lines", str(sample_pdf), "--csv", str(csv_path)])

    assert result.exit_code == 0, result.output
    df = pd.read_csv(csv_path)
    assert list(df.columns) == ["page", "column", "label", "baseline", "top", "fragments", "text"]
    assert df["text"].tolist() == ["First line of text", "Second line here", "Another page"]
    assert df["label"].tolist() == [1, 2, 1]
    assert df["baseline"].tolist() == [692.0, 662.0, 692.0]
    assert set(df["column"]) == {"all"}


def test_debug_layout_dump_and_overlay(two_column_pdf, tmp_path) -> None:
    dump = tmp_path / "dump.txt"
    result = runner.invoke(debug_app, ["layout", str(two_column_pdf), "--columns", "-o", str(dump)])

    assert result.exit_code == 0, result.output
    text = dump.read_text(encoding="utf-8")
    assert "--- FRAGMENTS ---" in text
    assert "[left 1]" in text
    assert "[right 3]" in text
    assert two_column_pdf.with_name("columns.annotated.pdf").exists()


def test_debug_layout_reports_broken_file(tmp_path) -> None:
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"this is not a pdf")

    result = runner.invoke(debug_app, ["layout", str(broken)])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert not (tmp_path / "broken.annotated.pdf").exists()
