from django.core.management.base import BaseCommand, CommandError

from agrilingua.rag import services
from agrilingua.rag.exceptions import RagError


class Command(BaseCommand):
    help = "Run a retrieval query and print the ranked chunks"

    def add_arguments(self, parser):
        parser.add_argument("query", nargs="+", help="The question to search for")
        parser.add_argument(
            "--top-k",
            type=int,
            help="Number of chunks to return",
        )
        parser.add_argument(
            "--threshold",
            type=float,
            help="Minimum cosine similarity for a chunk to be returned",
        )

    def handle(self, *args, **options):
        query = " ".join(options["query"])
        service = services.build_retrieval_service(services.get_settings())

        self.stdout.write(f"Query: {query}")
        try:
            results = service.retrieve(
                query,
                top_k=options["top_k"],
                match_threshold=options["threshold"],
            )
        except RagError as e:
            raise CommandError(f"Query failed: {e}") from e

        if not results:
            self.stdout.write(self.style.WARNING("No matching chunks found"))
            return

        self.stdout.write(self.style.SUCCESS(f"Found {len(results)} matching chunks:"))
        for rank, result in enumerate(results, 1):
            preview = result.chunk.content[:150].replace("\n", " ")
            self.stdout.write(
                f"\n{rank}. {result.chunk.document_name} "
                f"({result.similarity * 100:.1f}% similar)"
            )
            self.stdout.write(f"   {preview}...")
