"""
Django app configuration for rail-pdf.

Registers the ``rail_pdf`` template tag library and the ``render_pdf``
management command, and checks the ``RAIL_PDF`` settings at startup.
"""

import logging
import os

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class RailPdfConfig(AppConfig):
    """Django app configuration for rail-pdf."""

    name = "rail_pdf"
    verbose_name = "Rail PDF"
    label = "rail_pdf"

    def ready(self):
        """Validate configuration once Django has loaded."""
        try:
            self._validate_configuration()
        except Exception as e:
            logger.error("Error validating RAIL_PDF settings: %s", e)
            if self._is_debug_mode():
                raise

    def _validate_configuration(self):
        from .config import SETTINGS_NAME, _pdf_settings, get_pdf_settings

        raw = _pdf_settings()
        pdf_settings = get_pdf_settings()

        timeout = raw.get("timeout_seconds")
        if timeout is not None and pdf_settings.timeout_seconds != _as_float(timeout):
            logger.warning(
                "%s timeout_seconds %r is invalid, falling back to %s",
                SETTINGS_NAME,
                timeout,
                pdf_settings.timeout_seconds,
            )

        if pdf_settings.node_binary and not os.path.isfile(pdf_settings.node_binary):
            logger.warning(
                "%s node_binary %s does not exist", SETTINGS_NAME, pdf_settings.node_binary
            )

        if pdf_settings.script_path and not os.path.isfile(pdf_settings.script_path):
            logger.warning(
                "%s script_path %s does not exist", SETTINGS_NAME, pdf_settings.script_path
            )

        if pdf_settings.temp_dir and not os.path.isdir(pdf_settings.temp_dir):
            logger.warning(
                "%s temp_dir %s is not a directory", SETTINGS_NAME, pdf_settings.temp_dir
            )

        if pdf_settings.fake:
            logger.info("%s fake mode enabled, PDFs will not be rendered", SETTINGS_NAME)

        logger.debug("rail-pdf configuration validation completed")

    def _is_debug_mode(self):
        from django.conf import settings as django_settings

        return getattr(django_settings, "DEBUG", False)


def _as_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
