"""Core modules for the AudioSub bilingual subtitle tool.

Modules:
- bilingual_format: JSON segment parsing, SRT timestamps and SRT/transcript assembly
- media_utils: media type guessing, size/type validation, file reading
- upload_transcribe_translate_audio: model call producing bilingual segments
- session: processing state machine for one selected file
"""
