import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

import pytest

from audiosub.errors import ValidationError
from audiosub.media_utils import MAX_FILE_SIZE, guess_mime_type, validate_media_file


def test_max_file_size_is_15_mib():
    assert MAX_FILE_SIZE == 15 * 1024 * 1024


def test_exact_limit_accepted():
    validate_media_file(MAX_FILE_SIZE, "audio/mp3")


def test_one_byte_over_limit_rejected():
    with pytest.raises(ValidationError):
        validate_media_file(MAX_FILE_SIZE + 1, "audio/mp3")


def test_dropped_file_must_be_audio_or_video():
    validate_media_file(10, "video/mp4", dropped=True)
    with pytest.raises(ValidationError):
        validate_media_file(10, "text/plain", dropped=True)
    with pytest.raises(ValidationError):
        validate_media_file(10, None, dropped=True)


def test_picked_file_is_not_type_checked():
    validate_media_file(10, "text/plain", dropped=False)
    validate_media_file(10, None)


@pytest.mark.parametrize("path, expected", [
    ("a.mp3", "audio/mp3"),
    ("a.M4A", "audio/mp4"),
    ("a.wav", "audio/wav"),
    ("clip.mp4", "video/mp4"),
    ("noext", None),
])
def test_guess_mime_type(path, expected):
    assert guess_mime_type(path) == expected
