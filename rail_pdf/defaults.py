"""
Default configuration for the rail-pdf library.

Every key consumed by the library lives here; projects override any subset
through the ``RAIL_PDF`` dictionary in their Django settings.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-pdf"


LIBRARY_DEFAULTS: dict[str, Any] = {
    # Explicit Node.js executable. When unset the well-known install
    # locations and then PATH are searched.
    "node_binary": None,
    # Override for the bundled Playwright entry script.
    "script_path": None,
    "timeout_seconds": 60,
    # Parent directory for staging directories (system temp dir when None).
    "temp_dir": None,
    "temp_prefix": "rail-pdf-",
    # Exported as NODE_PATH so the entry script can resolve `playwright`.
    "node_modules_path": None,
    # Appended to PATH on POSIX systems.
    "extra_path": ["/usr/local/bin", "/opt/homebrew/bin"],
    # When True the Pdf facade hands out FakePdfBuilder instances.
    "fake": False,
    "default_filename": "document.pdf",
}


def merge_settings(*settings_dicts: dict[str, Any]) -> dict[str, Any]:
    """
    Merge multiple settings dictionaries with deep merging for nested dicts.
    Later dictionaries override earlier ones.
    """
    result: dict[str, Any] = {}
    for settings_dict in settings_dicts:
        for key, value in settings_dict.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = merge_settings(result[key], value)
            else:
                result[key] = value
    return result
