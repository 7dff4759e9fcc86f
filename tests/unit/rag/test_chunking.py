import pytest

from agrilingua.rag.chunking import (
    ParagraphChunkTransformer,
    chunk_text,
    split_paragraphs,
)


def paragraph(label, length):
    return (label + " " + "x" * length)[:length]


class TestSplitParagraphs:
    def test_splits_on_blank_lines(self):
        assert split_paragraphs("One.\n\nTwo.\n\n\n\nThree.") == ["One.", "Two.", "Three."]

    def test_blank_lines_with_whitespace(self):
        assert split_paragraphs("One.\n  \t\nTwo.") == ["One.", "Two."]

    def test_single_newlines_stay_inside_paragraph(self):
        assert split_paragraphs("Line one\nline two") == ["Line one\nline two"]

    def test_drops_empty_paragraphs(self):
        assert split_paragraphs("\n\n   \n\n") == []


class TestParagraphChunkTransformer:
    def test_short_paragraphs_share_a_chunk(self):
        text = "Para one.\n\nPara two.\n\nPara three."
        chunks = chunk_text(text, max_chunk_size=1000, min_chunk_size=0)
        assert chunks == ["Para one.\n\nPara two.\n\nPara three."]

    def test_chunk_under_minimum_size_is_dropped(self):
        text = "Para one.\n\nPara two.\n\nPara three."
        assert chunk_text(text, max_chunk_size=1000) == []

    def test_minimum_size_is_inclusive(self):
        text = "y" * 50
        assert chunk_text(text) == [text]
        assert chunk_text(text[:49]) == []

    def test_starts_new_chunk_when_budget_exceeded(self):
        first = paragraph("first", 800)
        second = paragraph("second", 800)
        chunks = chunk_text(f"{first}\n\n{second}", max_chunk_size=1500)
        assert chunks == [first, second]

    def test_oversized_paragraph_is_not_split(self):
        huge = paragraph("huge", 4000)
        small = paragraph("small", 100)
        chunks = chunk_text(f"{small}\n\n{huge}\n\n{small}", max_chunk_size=1500)
        assert chunks == [small, huge, small]

    def test_chunks_respect_budget_when_paragraphs_fit(self):
        paragraphs = [paragraph(f"p{i}", 300) for i in range(20)]
        chunks = chunk_text("\n\n".join(paragraphs), max_chunk_size=1500)

        for chunk in chunks:
            # the budget does not count separators
            assert len(chunk.replace("\n\n", "")) <= 1500

    def test_paragraph_order_is_preserved(self):
        paragraphs = [paragraph(f"p{i:02d}", 120) for i in range(30)]
        chunks = chunk_text("\n\n".join(paragraphs), max_chunk_size=500)

        rejoined = "\n\n".join(chunks)
        assert split_paragraphs(rejoined) == paragraphs

    def test_no_empty_chunks(self):
        text = "\n\n".join(["", "  ", paragraph("a", 60), "", paragraph("b", 60)])
        chunks = chunk_text(text)
        assert chunks
        assert all(chunk.strip() for chunk in chunks)

    def test_empty_text(self):
        assert chunk_text("") == []

    @pytest.mark.parametrize(
        "kwargs", [{"max_chunk_size": 0}, {"min_chunk_size": -1}]
    )
    def test_invalid_sizes(self, kwargs):
        with pytest.raises(ValueError):
            ParagraphChunkTransformer(**kwargs)
