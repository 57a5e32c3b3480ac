"""Collaborator services: authentication, vehicle records and report generation."""

from .auth import AuthService
from .vehicles import VehicleRepository, build_image_path
from .report_generator import ReportGenerator, build_prompt

__all__ = [
    "AuthService",
    "VehicleRepository",
    "build_image_path",
    "ReportGenerator",
    "build_prompt",
]
