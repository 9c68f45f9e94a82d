# seating/apps.py

from django.apps import AppConfig
import logging


class SeatingConfig(AppConfig):
    """App configuration for the Seating application."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'seating'
    verbose_name = "Table Seating"

    def ready(self):
        """
        Import signal modules when Django app registry is fully loaded.
        This binds the floor-plan broadcast receivers to the seating events.
        """
        import seating.signals  # noqa: F401  # Import solely for side effects
        logging.getLogger(__name__).info("✅ seating.signals module loaded successfully.")
