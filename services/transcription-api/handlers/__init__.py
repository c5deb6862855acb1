"""Request handlers orchestrating domain and infrastructure."""

from .persistence_handler import PersistenceHandler
from .provider_chain import ProviderChain
from .transcription_pipeline import TranscriptionPipeline

__all__ = ["PersistenceHandler", "ProviderChain", "TranscriptionPipeline"]
