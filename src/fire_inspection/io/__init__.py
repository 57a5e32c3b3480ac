"""I/O abstraction layer for object storage and file operations."""

from .storage_client import StorageClient
from .image_loader import load_image_bgr, read_image_size, save_image
from .json_handler import load_inspection_file, save_json

__all__ = [
    "StorageClient",
    "load_image_bgr",
    "read_image_size",
    "save_image",
    "load_inspection_file",
    "save_json",
]
