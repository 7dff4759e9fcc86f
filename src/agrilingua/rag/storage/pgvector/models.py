from typing import Self, Sequence

from django.db import models
from django.db.models import F
from pgvector.django import CosineDistance, VectorField


class DocumentChunkQuerySet(models.QuerySet["DocumentChunk"]):
    def annotate_with_similarity(
        self,
        query_vector: Sequence[float],
    ) -> Self:
        # pgvector's cosine distance is 1 - cosine similarity
        return self.annotate(
            distance=CosineDistance("embedding", list(query_vector))
        ).annotate(similarity=1.0 - F("distance"))

    def nearest(
        self,
        query_vector: Sequence[float],
        *,
        match_threshold: float,
        match_count: int,
    ) -> Self:
        return (
            self.annotate_with_similarity(query_vector)
            .filter(similarity__gte=match_threshold)
            .order_by("-similarity", "id")[:match_count]
        )


class DocumentChunkManager(models.Manager.from_queryset(DocumentChunkQuerySet)):
    pass


class DocumentChunk(models.Model):
    """
    A chunk of a farming document and its embedding, stored for PgVectorProvider.
    """

    document_name = models.CharField(max_length=255, db_index=True)
    content = models.TextField()
    metadata = models.JSONField(default=dict, blank=True)
    embedding = VectorField()
    created_at = models.DateTimeField(auto_now_add=True)

    objects = DocumentChunkManager()

    class Meta:
        db_table = "agrilingua_document_chunk"
        ordering = ["id"]

    def __str__(self):
        return f"{self.document_name}#{self.pk}"
