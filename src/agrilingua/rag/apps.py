from django.apps import AppConfig


class RagConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "agrilingua.rag"
    label = "agrilingua_rag"
    verbose_name = "AgriLingua document retrieval"
