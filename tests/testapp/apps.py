from django.apps import AppConfig


class AgriLinguaTestAppConfig(AppConfig):
    label = "testapp"
    name = "testapp"
    verbose_name = "AgriLingua tests"
