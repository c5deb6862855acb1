"""Handler for storing audio and transcripts."""

import re
from datetime import datetime, timezone
from typing import Any

from transcription_common import AudioNotFoundError, setup_logging
from transcription_common.infrastructure import AudioStorage

from domain.audio_formats import content_type_for
from domain.models import PersistedRecord, TranscriptionResult, UploadedAudio
from interfaces import TranscriptRepository

logger = setup_logging()

DEFAULT_USER_ID = "anonymous"

_UNSAFE_USER_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def normalize_user_id(user_id: str | None) -> str:
    """Reduces a user id to a safe storage path segment."""
    cleaned = _UNSAFE_USER_ID_CHARS.sub("_", (user_id or "").strip())[:64]
    return cleaned or DEFAULT_USER_ID


class PersistenceHandler:
    """Uploads audio to object storage and records the transcript row."""

    def __init__(
        self,
        storage: AudioStorage,
        repository: TranscriptRepository,
        verify_writes: bool = True,
    ):
        self._storage = storage
        self._repository = repository
        self._verify_writes = verify_writes

    def persist(
        self,
        audio: UploadedAudio,
        transcription: TranscriptionResult,
        user_id: str | None,
    ) -> PersistedRecord:
        """
        Stores the audio file and its transcript.

        Args:
            audio: The transient audio file to upload.
            transcription: The transcript to record.
            user_id: Tag for the row and storage namespace.

        Returns:
            PersistedRecord describing the stored row.

        Raises:
            AudioNotFoundError: If the transient file is missing.
            StorageUploadFailedError: If the upload or URL lookup fails.
            InsertFailedError: If the row insert fails.
        """
        user_id = normalize_user_id(user_id)

        try:
            with open(audio.path, "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            logger.error("Audio file missing before upload", extra={"path": audio.path})
            raise AudioNotFoundError(audio.path) from e

        object_name = f"user-{user_id}/{audio.file_name}"
        self._storage.upload(
            object_name=object_name,
            data=data,
            content_type=content_type_for(audio.extension),
            upsert=True,
        )
        audio_url = self._storage.get_public_url(object_name)

        created_at = datetime.now(timezone.utc)
        stored = self._repository.insert(
            {
                "audio_url": audio_url,
                "transcription": transcription.transcript,
                "user_id": user_id,
                "created_at": created_at.isoformat(),
            }
        )

        if self._verify_writes:
            self._verify(stored)

        record_id = stored.get("id")
        logger.info(
            "Transcript persisted",
            extra={"object_name": object_name, "record_id": record_id, "user_id": user_id},
        )
        return PersistedRecord(
            audio_url=audio_url,
            transcript=transcription.transcript,
            user_id=user_id,
            created_at=created_at,
            record_id=str(record_id) if record_id is not None else None,
        )

    def _verify(self, stored: dict[str, Any]) -> None:
        """Read-after-write check. Failures are logged, never raised."""
        record_id = stored.get("id")
        if record_id is None:
            logger.warning("Stored row has no id; skipping verification")
            return
        try:
            if self._repository.get(record_id) is None:
                logger.warning(
                    "Stored row not readable after insert",
                    extra={"record_id": record_id},
                )
        except Exception:
            logger.warning(
                "Read-after-write verification failed",
                extra={"record_id": record_id},
                exc_info=True,
            )
