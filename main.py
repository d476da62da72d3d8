"""Main entry point: transcribe one media file into a bilingual SRT."""

import os
import sys
import json
from dataclasses import dataclass

from dotenv import load_dotenv

from audiosub.errors import AudioSubError, ConfigurationError
from audiosub.models import ProcessingStatus
from audiosub.session import TranscriptionSession
from audiosub.upload_transcribe_translate_audio import DEFAULT_MODEL

DEFAULT_CONFIG_PATH = "config.json"
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass
class AppConfig:
    """Configuration for one transcription run."""
    audio_path: str
    output_dir: str = "output_srt"
    model: str = DEFAULT_MODEL
    dropped: bool = False
    verbose: bool = False
    write_transcript: bool = True
    print_srt: bool = False


def load_config(path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load run configuration from a JSON file."""
    if not os.path.isfile(path):
        raise ConfigurationError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(cfg, dict) or not cfg.get("audio_path"):
        raise ConfigurationError("audio_path must be specified in config")

    return AppConfig(
        audio_path=cfg["audio_path"],
        output_dir=cfg.get("output_dir", "output_srt"),
        model=cfg.get("model", DEFAULT_MODEL),
        dropped=bool(cfg.get("dropped", False)),
        verbose=bool(cfg.get("verbose", False)),
        write_transcript=bool(cfg.get("write_transcript", True)),
        print_srt=bool(cfg.get("print_srt", False)),
    )


def resolve_api_key() -> str:
    """Return the first API key found in the environment (after loading .env)."""
    load_dotenv()
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return ""


def run(config: AppConfig, api_key: str) -> str:
    """Run one session and return the SRT path."""
    if not os.path.isfile(config.audio_path):
        raise FileNotFoundError(f"Audio file not found or is a directory: {config.audio_path}")

    with TranscriptionSession(api_key, model=config.model, verbose=config.verbose) as session:
        session.select_file(config.audio_path, dropped=config.dropped)
        state = session.start()
        if state.status != ProcessingStatus.COMPLETED:
            raise RuntimeError(state.message)

        out_path = session.save_srt(config.output_dir)
        if config.write_transcript:
            base = os.path.splitext(session.srt_filename())[0]
            transcript_path = os.path.join(config.output_dir, base + ".transcript.txt")
            with open(transcript_path, "w", encoding="utf-8") as f:
                f.write(session.transcript_text())
            print(f"[SRT] wrote {transcript_path}")
        if config.print_srt:
            print(session.srt_text())
    return out_path


def run_from_config(config_path: str = DEFAULT_CONFIG_PATH) -> int:
    """Load configuration and run; returns a process exit code."""
    try:
        config = load_config(config_path)
        out_path = run(config, resolve_api_key())
    except (AudioSubError, OSError, RuntimeError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    print(f"SRT: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(run_from_config(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH))
