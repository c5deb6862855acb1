from transcription_common.infrastructure.interfaces import AudioStorage

__all__ = ["AudioStorage"]
