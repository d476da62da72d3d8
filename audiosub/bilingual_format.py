"""JSON segment parsing and bilingual SRT / transcript assembly."""

import json
import os
from typing import Any, Dict, List, Optional, Sequence

from .errors import ParseError
from .models import SubtitleSegment

REQUIRED_INT_FIELDS = ("startMs", "endMs")
REQUIRED_STR_FIELDS = ("original", "translation")

DEFAULT_SRT_NAME = "subtitle"


def format_time(total_ms: int) -> str:
    """Convert milliseconds to an SRT timestamp string HH:MM:SS,mmm.

    The value is decomposed like a UTC wall-clock time, so hours wrap at 24.
    """
    ms = total_ms % 1000
    total_sec = total_ms // 1000
    s = total_sec % 60
    total_min = total_sec // 60
    m = total_min % 60
    h = (total_min // 60) % 24
    return f"{h:02d}:{m:02d}:{s:02d},{ms:03d}"


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```) if present."""
    t = (text or "").strip()
    if not t.startswith("```"):
        return t
    lines = t.splitlines()
    if lines and lines[0].startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def _is_int(value: Any) -> bool:
    # bool is a subclass of int but never a valid timestamp
    return isinstance(value, int) and not isinstance(value, bool)


def parse_json_segments(text: str) -> List[Dict[str, Any]]:
    """Parse the model output: [{"startMs": 0, "endMs": 900, "original": "...", "translation": "..."}].

    Every element must carry the four fields with the right types; extra keys
    (e.g. an "id" the model made up) are dropped. Order is kept as returned.

    Raises:
        ParseError: invalid JSON, a non-list root, or a malformed element.
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseError(f"Model output is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array, got {type(data).__name__}")

    items: List[Dict[str, Any]] = []
    for idx, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ParseError(f"Entry {idx} is not an object: {entry!r}")
        for key in REQUIRED_INT_FIELDS:
            if not _is_int(entry.get(key)):
                raise ParseError(f"Entry {idx}: '{key}' must be an integer, got {entry.get(key)!r}")
        for key in REQUIRED_STR_FIELDS:
            if not isinstance(entry.get(key), str):
                raise ParseError(f"Entry {idx}: '{key}' must be a string, got {entry.get(key)!r}")
        items.append({key: entry[key] for key in REQUIRED_INT_FIELDS + REQUIRED_STR_FIELDS})
    return items


def segments_from_items(items: Sequence[Dict[str, Any]]) -> List[SubtitleSegment]:
    """Number parsed items 1..n in array order."""
    return [
        SubtitleSegment(
            id=i + 1,
            start_ms=it["startMs"],
            end_ms=it["endMs"],
            original=it["original"],
            translation=it["translation"],
        )
        for i, it in enumerate(items)
    ]


def generate_srt(segments: Sequence[SubtitleSegment]) -> str:
    """Assemble bilingual SRT text: number, time range, original line, translation line."""
    srt_blocks = [
        f"{i + 1}\n{format_time(seg.start_ms)} --> {format_time(seg.end_ms)}\n{seg.original}\n{seg.translation}\n"
        for i, seg in enumerate(segments)
    ]
    return "\n".join(srt_blocks)


def render_transcript(segments: Sequence[SubtitleSegment]) -> str:
    blocks = [
        f"[{format_time(seg.start_ms)} - {format_time(seg.end_ms)}]\n{seg.original}\n{seg.translation}"
        for seg in segments
    ]
    return "\n\n".join(blocks)


def srt_filename(name: Optional[str]) -> str:
    """Return '<name up to the first dot>.srt', or 'subtitle.srt' without a usable name."""
    base = os.path.basename(name or "").split(".")[0]
    return f"{base or DEFAULT_SRT_NAME}.srt"
