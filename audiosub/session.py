"""Processing state machine for one selected media file."""

import os
from typing import Callable, List, Optional

from .bilingual_format import generate_srt, render_transcript, srt_filename
from .media_utils import (
    DEFAULT_MIME_TYPE,
    guess_mime_type,
    read_media_file,
    validate_media_file,
)
from .models import ProcessingState, ProcessingStatus, SubtitleSegment
from .upload_transcribe_translate_audio import DEFAULT_MODEL, transcribe_audio

UPLOADING_MESSAGE = "Preparing audio..."
ANALYZING_MESSAGE = "Gemini is listening and translating..."
FALLBACK_ERROR_MESSAGE = "An unexpected error occurred."

Transcriber = Callable[..., List[SubtitleSegment]]


class TranscriptionSession:
    """Holds the selected file, its processing state and its segments.

    Status moves idle -> uploading -> analyzing -> completed | error within
    start(); only retry(), remove_file() or a new select_file() bring it back
    to idle.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        transcriber: Transcriber = transcribe_audio,
        verbose: bool = False,
    ):
        self.api_key = api_key
        self.model = model
        self.verbose = verbose
        self._transcriber = transcriber
        self.file_path: Optional[str] = None
        self.mime_type: Optional[str] = None
        self.segments: List[SubtitleSegment] = []
        self.state = ProcessingState()
        self._payload: Optional[bytes] = None

    def __enter__(self) -> "TranscriptionSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def file_name(self) -> Optional[str]:
        return os.path.basename(self.file_path) if self.file_path else None

    def select_file(self, path: str, dropped: bool = False) -> None:
        """Validate and select a file; a rejected file leaves the session untouched."""
        size = os.path.getsize(path)
        mime_type = guess_mime_type(path)
        validate_media_file(size, mime_type, dropped=dropped)

        self._release_payload()
        self.file_path = path
        self.mime_type = mime_type
        self.segments = []
        self.state = ProcessingState()
        print(f"[UPLOAD] selected {self.file_name} ({size} bytes, {mime_type or 'unknown type'})")

    def start(self) -> ProcessingState:
        """Transcribe the selected file. Only acts from idle with a file selected."""
        if not self.file_path or self.state.status != ProcessingStatus.IDLE:
            if self.verbose:
                print(f"[UPLOAD] start ignored in state {self.state.status.value}")
            return self.state

        self.state = ProcessingState(ProcessingStatus.UPLOADING, UPLOADING_MESSAGE)
        try:
            if self._payload is None:
                self._payload = read_media_file(self.file_path)
            mime_type = self.mime_type or DEFAULT_MIME_TYPE

            self.state = ProcessingState(ProcessingStatus.ANALYZING, ANALYZING_MESSAGE)
            print(f"[TR] start {self.file_name} model={self.model}", flush=True)
            result = self._transcriber(
                self._payload, mime_type, self.api_key, model=self.model, verbose=self.verbose
            )
        except Exception as e:
            self.state = ProcessingState(ProcessingStatus.ERROR, str(e) or FALLBACK_ERROR_MESSAGE)
            print(f"[TR] failed: {self.state.message}", flush=True)
            return self.state

        self.segments = list(result)
        self.state = ProcessingState(ProcessingStatus.COMPLETED)
        print(f"[TR] done {len(self.segments)} segments", flush=True)
        return self.state

    def retry(self) -> None:
        if self.state.status == ProcessingStatus.ERROR:
            self.state = ProcessingState()

    def remove_file(self) -> None:
        self._release_payload()
        self.file_path = None
        self.mime_type = None
        self.segments = []
        self.state = ProcessingState()

    def close(self) -> None:
        self._release_payload()

    def _release_payload(self) -> None:
        self._payload = None

    def srt_text(self) -> str:
        return generate_srt(self.segments)

    def transcript_text(self) -> str:
        return render_transcript(self.segments)

    def srt_filename(self) -> str:
        return srt_filename(self.file_name)

    def save_srt(self, output_dir: str) -> str:
        """Write the SRT next to other outputs and return its path."""
        os.makedirs(output_dir, exist_ok=True)
        out_path = os.path.join(output_dir, self.srt_filename())
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(self.srt_text())
        print(f"[SRT] wrote {out_path}")
        return out_path
