import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import json

import pytest

import main
from audiosub.errors import ConfigurationError
from audiosub.upload_transcribe_translate_audio import DEFAULT_MODEL


def _config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_load_config_defaults(tmp_path):
    cfg = main.load_config(_config(tmp_path, {"audio_path": "a.mp3"}))
    assert cfg.audio_path == "a.mp3"
    assert cfg.output_dir == "output_srt"
    assert cfg.model == DEFAULT_MODEL
    assert cfg.write_transcript is True
    assert cfg.print_srt is False


def test_load_config_requires_audio_path(tmp_path):
    with pytest.raises(ConfigurationError):
        main.load_config(_config(tmp_path, {"output_dir": "x"}))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        main.load_config(str(tmp_path / "nope.json"))


def test_resolve_api_key_order(monkeypatch):
    monkeypatch.setattr(main, "load_dotenv", lambda: None)
    for name in main.API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    assert main.resolve_api_key() == ""
    monkeypatch.setenv("API_KEY", "c")
    monkeypatch.setenv("GEMINI_API_KEY", "a")
    assert main.resolve_api_key() == "a"


def test_missing_key_fails_run(tmp_path, monkeypatch):
    audio = tmp_path / "a.mp3"
    audio.write_bytes(b"\x00" * 4)
    cfg = _config(tmp_path, {"audio_path": str(audio), "output_dir": str(tmp_path / "out")})
    monkeypatch.setattr(main, "resolve_api_key", lambda: "")
    assert main.run_from_config(cfg) == 1
    assert not (tmp_path / "out").exists()
