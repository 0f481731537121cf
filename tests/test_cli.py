"""
Tests for the portfolio-render command line.
"""
import pytest

from portfolio_toolkit.cli import build_parser, main
from portfolio_toolkit.core.utils import save_document


def test_main_renders_pdf(tmp_path, sample_document, capsys):
    # Arrange
    doc_path = tmp_path / "doc.json"
    save_document(sample_document, doc_path)
    output = tmp_path / "out.pdf"

    # Act
    code = main([str(doc_path), "--theme", "classic", "--output", str(output), "--no-footer"])

    # Assert
    assert code == 0
    assert output.exists()
    assert "pages" in capsys.readouterr().out


def test_main_returns_1_on_build_error(tmp_path):
    code = main([str(tmp_path / "missing.json"), "--output", str(tmp_path / "out.pdf")])
    assert code == 1


def test_unknown_theme_is_rejected(tmp_path):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["doc.json", "--theme", "neon", "--output", "o.pdf"])


def test_non_pdf_output_is_a_usage_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["doc.json", "--output", str(tmp_path / "o.txt")])
    assert excinfo.value.code == 2


def test_main_returns_1_when_document_is_not_utf8(tmp_path):
    doc_path = tmp_path / "latin.json"
    doc_path.write_bytes(b'{"studentName": "\xff\xfe"}')

    code = main([str(doc_path), "--output", str(tmp_path / "out.pdf")])

    assert code == 1
    assert not (tmp_path / "out.pdf").exists()
