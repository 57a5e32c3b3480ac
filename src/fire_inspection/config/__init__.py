"""Configuration management for the inspection application."""

from .settings import settings
from .constants import (
    SIDE_LABELS_FR,
    CHECKLIST_TEMPLATE,
    REPORT_PROMPT_FR,
)

__all__ = [
    "settings",
    "SIDE_LABELS_FR",
    "CHECKLIST_TEMPLATE",
    "REPORT_PROMPT_FR",
]
