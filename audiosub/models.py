"""Data models for AudioSub."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class SubtitleSegment:
    """One transcribed and translated utterance."""
    id: int
    start_ms: int
    end_ms: int
    original: str
    translation: str


class ProcessingStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProcessingState:
    status: ProcessingStatus = ProcessingStatus.IDLE
    message: Optional[str] = None
