"""Data models for the inspection application."""

from .geometry import ImageSize, ContainerSize, RenderedRect, ViewTransform
from .inspection import (
    Side,
    MarkerPosition,
    DefectDraft,
    Defect,
    ChecklistItem,
    ClickRecord,
    RecordedDefect,
    InspectionFile,
)
from .account import UserSession, UserProfile, ProfileUpdate
from .vehicle import Vehicle, VehicleWithUrls, ImageUpload, VehicleForm, image_column
from .report import InspectionReport, InspectionSummary

__all__ = [
    "ImageSize",
    "ContainerSize",
    "RenderedRect",
    "ViewTransform",
    "Side",
    "MarkerPosition",
    "DefectDraft",
    "Defect",
    "ChecklistItem",
    "ClickRecord",
    "RecordedDefect",
    "InspectionFile",
    "UserSession",
    "UserProfile",
    "ProfileUpdate",
    "Vehicle",
    "VehicleWithUrls",
    "ImageUpload",
    "VehicleForm",
    "image_column",
    "InspectionReport",
    "InspectionSummary",
]
