from django.core.management.base import BaseCommand

from agrilingua.rag import services


class Command(BaseCommand):
    help = "Show how many chunks are stored and which documents they come from"

    def handle(self, *args, **options):
        rag_settings = services.get_settings()
        provider = services.get_storage_provider(rag_settings)

        count = provider.count()
        self.stdout.write(f"Storage provider: {rag_settings.storage_provider}")
        self.stdout.write(f"Stored chunks: {count}")

        if not count:
            self.stdout.write(
                self.style.WARNING(
                    "No documents stored. Run load_reference_documents or "
                    "ingest_documents to add some."
                )
            )
            return

        self.stdout.write(self.style.SUCCESS("Documents:"))
        for name in provider.document_names():
            self.stdout.write(f"  - {name}")
