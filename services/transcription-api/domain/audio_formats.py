"""Audio file extension and content-type mappings."""

import os

GENERIC_AUDIO_CONTENT_TYPE = "audio/*"

CONTENT_TYPES_BY_EXTENSION = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".webm": "audio/webm",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
}

EXTENSIONS_BY_MIME_TYPE = {
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/webm": ".webm",
    "audio/ogg": ".ogg",
    "audio/x-m4a": ".m4a",
}


def content_type_for(extension: str) -> str:
    """Returns the content type for an extension, or a generic audio wildcard."""
    return CONTENT_TYPES_BY_EXTENSION.get(extension.lower(), GENERIC_AUDIO_CONTENT_TYPE)


def extension_for(filename: str | None, content_type: str | None) -> str:
    """
    Picks a safe file extension for a transient audio file.

    Uses the filename's extension only when it is a known audio extension,
    otherwise falls back to the declared MIME type. Never returns anything
    taken verbatim from user input beyond the known set.
    """
    extension = os.path.splitext(filename or "")[1].lower()
    if extension in CONTENT_TYPES_BY_EXTENSION:
        return extension
    return EXTENSIONS_BY_MIME_TYPE.get((content_type or "").lower(), "")
