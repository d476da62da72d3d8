"""Media type detection, upload validation and file reading."""

import mimetypes
import os
from typing import Optional

from .errors import ValidationError

# Inline payloads travel base64-encoded inside the request body
MAX_FILE_SIZE = 15 * 1024 * 1024
DEFAULT_MIME_TYPE = "audio/mp3"
ACCEPTED_TYPE_PREFIXES = ("audio/", "video/")

_EXTENSION_MIME_TYPES = {
    ".mp3": "audio/mp3",
    ".m4a": "audio/mp4",
    ".mp4": "video/mp4",
    ".aac": "audio/aac",
    ".wav": "audio/wav",
    ".flac": "audio/flac",
    ".ogg": "audio/ogg",
    ".oga": "audio/ogg",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".mkv": "video/x-matroska",
}


def guess_mime_type(path: str) -> Optional[str]:
    """Guess the MIME type of a media file from its extension; None if unknown."""
    ext = os.path.splitext(path)[1].lower()
    if ext in _EXTENSION_MIME_TYPES:
        return _EXTENSION_MIME_TYPES[ext]
    guessed, _ = mimetypes.guess_type(path)
    return guessed


def validate_media_file(size: int, mime_type: Optional[str], dropped: bool = False) -> None:
    """Reject files over MAX_FILE_SIZE and, for dropped files, non audio/video types.

    Files chosen through the picker are not type-checked.
    """
    if dropped and not (mime_type or "").startswith(ACCEPTED_TYPE_PREFIXES):
        raise ValidationError("Please drop a valid audio or video file.")
    if size > MAX_FILE_SIZE:
        raise ValidationError(
            f"File is too large ({size} bytes). Please upload a file smaller than 15MB."
        )


def read_media_file(path: str) -> bytes:
    """Read the whole file; OSError propagates to the caller."""
    with open(path, "rb") as f:
        return f.read()
