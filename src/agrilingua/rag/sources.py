"""
Loading document text from disk for ingestion.

PDF text is extracted page by page with pypdf; plain text and Markdown files
are read as-is. The bundled reference handouts are shipped pre-chunked as a
JSON fixture.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from pypdf import PdfReader

from .schema import Chunk

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".pdf", ".txt", ".md")

REFERENCE_DOCUMENTS_PATH = Path(__file__).parent / "fixtures" / "reference_documents.json"


@dataclass
class SourceDocument:
    name: str
    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


def read_pdf(path: Path) -> SourceDocument:
    reader = PdfReader(path)
    pages = [(page.extract_text() or "").strip() for page in reader.pages]
    return SourceDocument(
        name=path.stem,
        text="\n\n".join(page for page in pages if page),
        metadata={"source": path.name, "pages": len(reader.pages)},
    )


def read_document(path: str | Path) -> SourceDocument:
    """Read a single supported file; the document is named after the file."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file type: {path.name}")

    if suffix == ".pdf":
        return read_pdf(path)

    return SourceDocument(
        name=path.stem,
        text=path.read_text(encoding="utf-8"),
        metadata={"source": path.name},
    )


def collect_paths(paths: Iterable[str | Path]) -> list[Path]:
    """Expand directories (one level deep) into the supported files they hold."""
    collected = []
    for path in map(Path, paths):
        if path.is_dir():
            collected.extend(
                sorted(
                    child
                    for child in path.iterdir()
                    if child.is_file() and child.suffix.lower() in SUPPORTED_SUFFIXES
                )
            )
        elif path.exists():
            collected.append(path)
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
    return collected


def load_reference_chunks(path: str | Path = REFERENCE_DOCUMENTS_PATH) -> list[Chunk]:
    """Load the hand-authored reference handouts as ready-made chunks."""
    with open(path, encoding="utf-8") as f:
        documents = json.load(f)

    chunks = [
        Chunk(
            document_name=document["document_name"],
            content=chunk["content"],
            metadata=chunk.get("metadata", {}),
        )
        for document in documents
        for chunk in document["chunks"]
    ]
    logger.debug(f"Loaded {len(chunks)} reference chunks from {path}")
    return chunks
