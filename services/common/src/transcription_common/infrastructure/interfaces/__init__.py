from transcription_common.infrastructure.interfaces.storage import AudioStorage

__all__ = [
    "AudioStorage",
]
