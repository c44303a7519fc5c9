# journals/apps.py

"""
JOURNALS APP CONFIG

Journal creation and reconciliation engine:
- batches fulfilled order details into double-entry journal rows
- one pending journal per facility
- derived reconciliation status
"""

from django.apps import AppConfig


class JournalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "journals"
    verbose_name = "Journals"
