"""Request pipeline: upload, transcription, persistence and cleanup."""

import uuid
from typing import BinaryIO

from transcription_common import PersistenceError
from transcription_common.logging import setup_logging

from domain import PipelineResult, PipelineStage, UploadedAudio, UploadReceiver
from exceptions import ProviderError
from handlers.persistence_handler import PersistenceHandler
from handlers.provider_chain import ProviderChain

logger = setup_logging()


class TranscriptionPipeline:
    """Orchestrates one transcription request from upload to response."""

    def __init__(
        self,
        receiver: UploadReceiver,
        provider_chain: ProviderChain,
        persistence: PersistenceHandler | None,
    ):
        self._receiver = receiver
        self._provider_chain = provider_chain
        self._persistence = persistence

    def run(
        self,
        filename: str | None,
        content_type: str | None,
        size: int | None,
        data: BinaryIO,
        user_id: str | None = None,
    ) -> PipelineResult:
        """
        Runs the pipeline for one uploaded file.

        The transient file is released exactly once when processing ends,
        on success and on every failure path.

        Raises:
            InvalidUploadError: If the upload is rejected. No file is written.
            ProviderError: If no provider produced a transcript.
            PersistenceError: If storage is not configured, or storing the
                audio or transcript fails.
        """
        request_id = uuid.uuid4().hex
        self._transition(request_id, PipelineStage.RECEIVED, upload_name=filename)

        try:
            transient = self._receiver.receive(filename, content_type, size, data)
        except Exception as e:
            self._transition(request_id, PipelineStage.FAILED, error=type(e).__name__)
            raise

        self._transition(request_id, PipelineStage.VALIDATED, path=transient.audio.path)

        try:
            with transient as audio:
                try:
                    result = self._process(request_id, audio, user_id)
                except Exception as e:
                    self._transition(
                        request_id, PipelineStage.FAILED, error=type(e).__name__
                    )
                    raise
        finally:
            self._transition(request_id, PipelineStage.CLEANED)

        self._transition(request_id, PipelineStage.RESPONDED)
        return result

    def _process(
        self, request_id: str, audio: UploadedAudio, user_id: str | None
    ) -> PipelineResult:
        if self._persistence is None:
            raise PersistenceError("Transcript storage is not configured")

        self._transition(request_id, PipelineStage.TRANSCRIBING)
        outcome = self._provider_chain.transcribe(audio)
        if isinstance(outcome, ProviderError):
            raise outcome

        self._transition(
            request_id, PipelineStage.PERSISTING, provider=outcome.provider
        )
        record = self._persistence.persist(audio, outcome, user_id)

        return PipelineResult(transcription=outcome, record=record)

    def _transition(self, request_id: str, stage: PipelineStage, **details) -> None:
        logger.info(
            "Pipeline stage",
            extra={"request_id": request_id, "stage": stage.value, **details},
        )
