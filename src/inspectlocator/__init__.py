from __future__ import annotations

from .inspector import ElementInspector, build_report, inspect, is_enabled, set_enabled
from .models import InspectionReport, LocatorSuggestion, MatchCandidate, UiNode
from .settings import InspectorSettings

__version__ = "0.1.0"

__all__ = [
    "ElementInspector",
    "InspectionReport",
    "InspectorSettings",
    "LocatorSuggestion",
    "MatchCandidate",
    "UiNode",
    "build_report",
    "inspect",
    "is_enabled",
    "set_enabled",
]
