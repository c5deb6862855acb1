"""Concrete implementations of infrastructure interfaces."""

from .deepgram_transcriber import DeepgramTranscriber
from .google_speech_transcriber import GoogleSpeechTranscriber
from .supabase_storage import SupabaseAudioStorage
from .supabase_transcript_repository import SupabaseTranscriptRepository

__all__ = [
    "DeepgramTranscriber",
    "GoogleSpeechTranscriber",
    "SupabaseAudioStorage",
    "SupabaseTranscriptRepository",
]
