from django.apps import AppConfig


class PayOSKitConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'payoskit'
    verbose_name = 'PayOS Payments'
