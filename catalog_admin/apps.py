from django.apps import AppConfig


class CatalogAdminConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'catalog_admin'

    def ready(self):
        import catalog_admin.signals
