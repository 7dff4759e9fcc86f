from unittest import mock

import pytest

from agrilingua.rag.sources import (
    collect_paths,
    load_reference_chunks,
    read_document,
)


def test_reference_chunks():
    chunks = load_reference_chunks()

    assert len(chunks) == 17
    assert [name for name in dict.fromkeys(chunk.document_name for chunk in chunks)] == [
        "Soil Type Handout",
        "Irrigation Water Management Guide",
        "Vegetable Garden Planting Guide",
    ]
    assert chunks[1].content.startswith("WSU Percolation Test for Drainage")
    assert chunks[1].metadata == {"section": "Percolation Test", "page": 1}


def test_read_text_document(tmp_path):
    path = tmp_path / "Cassava Notes.md"
    path.write_text("# Cassava\n\nPlant stems 1m apart.", encoding="utf-8")

    document = read_document(path)

    assert document.name == "Cassava Notes"
    assert document.text == "# Cassava\n\nPlant stems 1m apart."
    assert document.metadata == {"source": "Cassava Notes.md"}


@mock.patch("agrilingua.rag.sources.PdfReader")
def test_read_pdf_document(mock_reader, tmp_path):
    path = tmp_path / "Soil Type Handout.pdf"
    path.write_bytes(b"%PDF-1.4")
    pages = [mock.Mock(), mock.Mock(), mock.Mock()]
    pages[0].extract_text.return_value = "Soil Types and Classification "
    pages[1].extract_text.return_value = None
    pages[2].extract_text.return_value = "Supporting Soil Biology"
    mock_reader.return_value.pages = pages

    document = read_document(path)

    mock_reader.assert_called_once_with(path)
    assert document.name == "Soil Type Handout"
    assert document.text == "Soil Types and Classification\n\nSupporting Soil Biology"
    assert document.metadata == {"source": "Soil Type Handout.pdf", "pages": 3}


def test_unsupported_file_type(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"")
    with pytest.raises(ValueError):
        read_document(path)


def test_collect_paths(tmp_path):
    (tmp_path / "b.txt").write_text("b")
    (tmp_path / "a.pdf").write_bytes(b"")
    (tmp_path / "ignored.docx").write_bytes(b"")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "c.txt").write_text("c")
    extra = tmp_path / "nested" / "c.txt"

    paths = collect_paths([tmp_path, extra])

    assert paths == [tmp_path / "a.pdf", tmp_path / "b.txt", extra]


def test_collect_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        collect_paths([tmp_path / "missing.pdf"])
