from django.apps import AppConfig


class SusCheckConfig(AppConfig):
    name = 'suscheck'
    verbose_name = 'SusCheck'
