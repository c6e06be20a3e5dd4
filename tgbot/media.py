"""Photo payloads: remote URL or local file upload."""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteReference:
    url: str


@dataclass(frozen=True)
class LocalFile:
    path: str

    @property
    def filename(self) -> str:
        return os.path.basename(self.path)


Photo = Union[RemoteReference, LocalFile]


def is_remote(path: str) -> bool:
    return path.lower().startswith("http")


def resolve_photo(photo_path) -> Optional[Photo]:
    """Classify a photo path, checking local files exist.

    Remote paths are never looked up on disk.
    """
    if not photo_path or not isinstance(photo_path, str):
        logger.error("Path to attached photo must be set")
        return None
    if is_remote(photo_path):
        return RemoteReference(photo_path)
    if not os.path.isfile(photo_path):
        logger.error("Photo at local path %s does not exist", photo_path)
        return None
    return LocalFile(photo_path)


def form_value(photo: Photo) -> Union[str, LocalFile]:
    """Value to place in the multipart body for the ``photo`` field."""
    if isinstance(photo, RemoteReference):
        return photo.url
    return photo
