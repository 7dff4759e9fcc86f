from django.core.management.base import BaseCommand, CommandError

from agrilingua.rag import services
from agrilingua.rag.sources import REFERENCE_DOCUMENTS_PATH, load_reference_chunks


class Command(BaseCommand):
    help = "Store the bundled soil, irrigation and planting reference handouts"

    def add_arguments(self, parser):
        parser.add_argument(
            "--fixture",
            default=str(REFERENCE_DOCUMENTS_PATH),
            help="JSON file of pre-chunked documents to load",
        )

    def handle(self, *args, **options):
        chunks = load_reference_chunks(options["fixture"])
        document_names = list(dict.fromkeys(chunk.document_name for chunk in chunks))

        self.stdout.write(
            f"Preparing to store {len(chunks)} chunks from {len(document_names)} documents:"
        )
        for name in document_names:
            self.stdout.write(f"  - {name}")

        service = services.build_ingestion_service(services.get_settings())
        report = service.ingest_chunks(chunks)

        if report.rejected:
            self.stdout.write(
                self.style.WARNING(f"{report.rejected} chunks could not be embedded")
            )
        for error in report.errors:
            self.stdout.write(self.style.ERROR(error))

        if report.accepted == 0:
            raise CommandError("No reference chunks were stored")

        self.stdout.write(self.style.SUCCESS(f"Stored {report.accepted} chunks"))
