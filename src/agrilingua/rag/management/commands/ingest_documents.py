"""
Django management command to ingest documents from disk.

PDF, plain text and Markdown files are chunked, embedded and stored. With
--dry-run the chunks are written out as JSON instead, ready to be posted to
the store-documents endpoint.
"""

import json
import logging
import time
from dataclasses import asdict

from django.core.management.base import BaseCommand, CommandError

from agrilingua.rag import services
from agrilingua.rag.chunking import ParagraphChunkTransformer
from agrilingua.rag.schema import IngestionReport
from agrilingua.rag.sources import collect_paths, read_document

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Chunk, embed and store PDF, text and Markdown documents"

    def add_arguments(self, parser):
        parser.add_argument(
            "paths",
            nargs="+",
            help="Files or directories of documents to ingest",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Write the chunks as JSON without embedding or storing them",
        )
        parser.add_argument(
            "--output",
            help="File to write --dry-run chunks to (defaults to stdout)",
        )
        parser.add_argument(
            "--max-chunk-size",
            type=int,
            help="Override the maximum chunk size in characters",
        )
        parser.add_argument(
            "--verbose",
            action="store_true",
            help="Enable verbose output",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        verbose = options["verbose"]

        if verbose:
            logger.setLevel(logging.DEBUG)

        try:
            paths = collect_paths(options["paths"])
        except FileNotFoundError as e:
            raise CommandError(str(e)) from e

        if not paths:
            self.stdout.write(self.style.WARNING("No supported documents found"))
            return

        rag_settings = services.get_settings()
        service = services.build_ingestion_service(rag_settings)
        if options["max_chunk_size"]:
            try:
                service.chunk_transformer = ParagraphChunkTransformer(
                    max_chunk_size=options["max_chunk_size"],
                    min_chunk_size=rag_settings.min_chunk_size,
                )
            except ValueError as e:
                raise CommandError(str(e)) from e

        if dry_run:
            self._write_chunks(service, paths, options["output"])
            return

        start_time = time.time()
        self.stdout.write(f"Found {len(paths)} document(s) to ingest")

        report = IngestionReport()
        for i, path in enumerate(paths, 1):
            self.stdout.write(f"\n[{i}/{len(paths)}] Ingesting: {path.name}")
            try:
                document = read_document(path)
            except Exception as e:
                self.stdout.write(self.style.ERROR(f"  ✗ Could not read '{path}': {e}"))
                report.errors.append(f"{path.name}: {e}")
                continue

            document_report = service.ingest(
                document.name, document.text, document.metadata
            )
            report = report.merge(document_report)
            self.stdout.write(
                self.style.SUCCESS(
                    f"  ✓ Stored {document_report.accepted} chunks from '{document.name}'"
                )
            )
            if document_report.rejected:
                self.stdout.write(
                    self.style.WARNING(
                        f"  {document_report.rejected} chunks could not be embedded"
                    )
                )

        elapsed_time = time.time() - start_time
        self.stdout.write("")
        self.stdout.write(self.style.SUCCESS("=== Ingestion Summary ==="))
        self.stdout.write(f"Chunks stored: {report.accepted}")
        self.stdout.write(f"Chunks rejected: {report.rejected}")
        self.stdout.write(f"Total time: {elapsed_time:.2f} seconds")

        if report.errors:
            for error in report.errors:
                self.stdout.write(self.style.ERROR(f"  {error}"))
            raise CommandError(f"Ingestion finished with {len(report.errors)} error(s)")

    def _write_chunks(self, service, paths, output):
        chunks = []
        for path in paths:
            document = read_document(path)
            document_chunks = service.chunk_document(
                document.name, document.text, document.metadata
            )
            self.stderr.write(f"{document.name}: {len(document_chunks)} chunks")
            chunks.extend(asdict(chunk) for chunk in document_chunks)

        payload = json.dumps(chunks, indent=2, ensure_ascii=False)
        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(payload)
            self.stdout.write(
                self.style.SUCCESS(f"Wrote {len(chunks)} chunks to {output}")
            )
        else:
            self.stdout.write(payload)
