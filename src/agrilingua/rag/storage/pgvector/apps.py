from django.apps import AppConfig


class PgVectorStorageConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "agrilingua.rag.storage.pgvector"
    label = "agrilingua_pgvector"
    verbose_name = "AgriLingua pgvector chunk storage"
