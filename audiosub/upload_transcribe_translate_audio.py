"""Handles interaction with the Gemini API for bilingual transcription."""

import time
from typing import List

from google import genai
from google.genai import types

from .bilingual_format import parse_json_segments, segments_from_items
from .errors import ConfigurationError, ServiceError
from .models import SubtitleSegment

DEFAULT_MODEL = "gemini-3-flash-preview"

SYSTEM_INSTRUCTION = """You are a professional subtitle translator and transcriber.
Your task is to analyze the provided audio file.
1. Accurately transcribe every sentence verbatim (Original).
2. Translate the sentence:
   - If Original is English -> Translate to Simplified Chinese.
   - If Original is Chinese -> Translate to English.
   - If Mixed or any other language, translate to whichever of the two is not the source language.
3. Provide precise start and end timestamps in milliseconds.
4. Ensure the segmentation is logical (by sentence or phrase).
5. Return the result strictly as a JSON array.
"""

DIRECTIVE_TEXT = "Generate subtitles for this audio."

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "startMs": types.Schema(type=types.Type.INTEGER, description="Start time in milliseconds"),
            "endMs": types.Schema(type=types.Type.INTEGER, description="End time in milliseconds"),
            "original": types.Schema(type=types.Type.STRING, description="The transcribed original text"),
            "translation": types.Schema(type=types.Type.STRING, description="The translated text"),
        },
        required=["startMs", "endMs", "original", "translation"],
    ),
)


def build_request_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=SYSTEM_INSTRUCTION,
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
        safety_settings=[
            types.SafetySetting(
                category=types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
                threshold=types.HarmBlockThreshold.BLOCK_NONE,
            )
        ],
    )


def transcribe_audio(
    audio_bytes: bytes,
    mime_type: str,
    api_key: str,
    model: str = DEFAULT_MODEL,
    verbose: bool = False,
) -> List[SubtitleSegment]:
    """Send one file to the model and return its numbered bilingual segments.

    The payload goes inline; the SDK base64-encodes inline data on the wire.
    Exactly one request is made; failures are not retried.

    Raises:
        ConfigurationError: api_key is empty (no request is made).
        ServiceError: the call failed or returned no text.
        ParseError: the returned text is not the expected JSON array.
    """
    if not api_key:
        raise ConfigurationError("Missing API key. Please check your environment configuration.")

    audio_part = types.Part.from_bytes(data=audio_bytes, mime_type=mime_type)
    t0 = time.time()
    try:
        client = genai.Client(api_key=api_key)
        response = client.models.generate_content(
            model=model,
            contents=[audio_part, DIRECTIVE_TEXT],
            config=build_request_config(),
        )
    except Exception as e:
        print(f"[TR] {model} error {time.time() - t0:.1f}s: {e}", flush=True)
        raise ServiceError(str(e) or "Transcription request failed.") from e

    text = (getattr(response, "text", None) or "").strip()
    if verbose:
        print(f"[TR] {model} responded in {time.time() - t0:.1f}s ({len(text)} chars)")
    if not text:
        raise ServiceError("Gemini returned no response.")

    segments = segments_from_items(parse_json_segments(text))
    if verbose:
        print(f"[TR] parsed {len(segments)} segments")
    return segments
