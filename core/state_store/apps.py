"""
HGS State Store - App Configuration
===================================
Persistent key/value fields of governed equipment instances.
"""

from django.apps import AppConfig


class CoreStateStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.state_store"
    label = "core_state_store"
    verbose_name = "HGS State Store"
