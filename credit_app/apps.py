from django.apps import AppConfig


class CreditAppConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'credit_app'
    verbose_name = 'Customers and credits'
