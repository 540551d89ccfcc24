from __future__ import annotations


class InspectorError(Exception):
    """Base exception for inspectlocator."""


class SettingsError(InspectorError):
    """Raised when a settings payload has values of the wrong type."""
