from django.apps import AppConfig


class SheetProcessorConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'sheet_processor'
    verbose_name = 'Spreadsheet uploads'
