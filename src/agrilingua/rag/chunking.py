import re
from typing import Protocol

DEFAULT_MAX_CHUNK_SIZE = 1500
DEFAULT_MIN_CHUNK_SIZE = 50

PARAGRAPH_SEPARATOR = "\n\n"

# A blank line, possibly holding stray whitespace, ends a paragraph
PARAGRAPH_BREAK = re.compile(r"\n[ \t\r\f\v]*\n\s*")


class ChunkTransformer(Protocol):
    """Base class for chunking transformers which break a string into a list of strings."""

    def transform(self, text: "str") -> list["str"]:
        """Transform a string into chunks."""
        ...


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank lines, returning trimmed, non-empty paragraphs."""
    return [p.strip() for p in PARAGRAPH_BREAK.split(text) if p.strip()]


class ParagraphChunkTransformer(ChunkTransformer):
    """Chunks strings by paragraphs, packing whole paragraphs up to a size budget.

    A chunk only ends early when the next paragraph would push it past
    ``max_chunk_size``; a single paragraph larger than the budget becomes a
    chunk of its own and is never truncated. Chunks shorter than
    ``min_chunk_size`` (stray headers, page numbers) are dropped.
    """

    def __init__(
        self,
        max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
        min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
    ):
        if max_chunk_size < 1:
            raise ValueError("max_chunk_size must be at least 1")
        if min_chunk_size < 0:
            raise ValueError("min_chunk_size cannot be negative")
        self.max_chunk_size = max_chunk_size
        self.min_chunk_size = min_chunk_size

    def transform(self, text: str) -> list[str]:
        chunks = []
        current_chunk = ""

        for paragraph in split_paragraphs(text):
            if (
                current_chunk
                and len(current_chunk) + len(paragraph) > self.max_chunk_size
            ):
                chunks.append(current_chunk)
                current_chunk = paragraph
            elif current_chunk:
                current_chunk += PARAGRAPH_SEPARATOR + paragraph
            else:
                current_chunk = paragraph

        if current_chunk:
            chunks.append(current_chunk)

        return [chunk for chunk in chunks if len(chunk) >= self.min_chunk_size]


def chunk_text(
    text: str,
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
    min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
) -> list[str]:
    """Split document text into paragraph-aligned chunks."""
    return ParagraphChunkTransformer(
        max_chunk_size=max_chunk_size, min_chunk_size=min_chunk_size
    ).transform(text)
