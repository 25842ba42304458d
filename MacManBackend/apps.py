"""
App configuration for MacManBackend.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class MacManBackendConfig(AppConfig):
    """App configuration for the MacManBackend project package."""

    name = "MacManBackend"
    verbose_name = "MacMan Backend"

    def ready(self):
        """Wire event handlers and, when enabled, tracing."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if settings.OTEL_ENABLED:
            from core.instrumentation import setup_opentelemetry

            setup_opentelemetry()
            logger.info("Observability setup complete")
