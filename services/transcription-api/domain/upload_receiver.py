"""Validation and transient storage of uploaded audio files."""

import os
import uuid
from typing import BinaryIO

from transcription_common.logging import setup_logging

from exceptions import InvalidUploadError

from .audio_formats import extension_for
from .models import UploadedAudio

logger = setup_logging()

_CHUNK_SIZE = 1024 * 1024


class TransientAudio:
    """
    Scoped ownership of one transient audio file.

    Used as a context manager; the file is removed on exit whatever the
    outcome, and at most once.
    """

    def __init__(self, audio: UploadedAudio):
        self._audio = audio
        self._released = False

    @property
    def audio(self) -> UploadedAudio:
        return self._audio

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> bool:
        """Deletes the transient file. Returns False if already released."""
        if self._released:
            return False
        self._released = True
        try:
            os.remove(self._audio.path)
            logger.info("Transient audio removed", extra={"path": self._audio.path})
        except FileNotFoundError:
            logger.warning(
                "Transient audio already missing", extra={"path": self._audio.path}
            )
        return True

    def __enter__(self) -> UploadedAudio:
        return self._audio

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class UploadReceiver:
    """Validates uploads and stores accepted ones under unique transient names."""

    def __init__(
        self,
        upload_dir: str,
        max_size_bytes: int,
        allowed_mime_types: tuple[str, ...],
    ):
        self._upload_dir = upload_dir
        self._max_size_bytes = max_size_bytes
        self._allowed_mime_types = frozenset(t.lower() for t in allowed_mime_types)

    @property
    def upload_dir(self) -> str:
        return self._upload_dir

    def validate(
        self, filename: str | None, content_type: str | None, size: int | None
    ) -> None:
        """
        Checks an upload against presence, MIME type and size rules.

        Raises:
            InvalidUploadError: If the upload is not acceptable.
        """
        if not filename:
            raise InvalidUploadError("No audio file provided")

        mime_type = (content_type or "").lower()
        if mime_type not in self._allowed_mime_types:
            raise InvalidUploadError(f"Unsupported file type: {content_type}")

        if size is not None and size > self._max_size_bytes:
            raise InvalidUploadError(
                f"File exceeds maximum size of {self._max_size_bytes} bytes"
            )

    def receive(
        self,
        filename: str | None,
        content_type: str | None,
        size: int | None,
        data: BinaryIO,
    ) -> TransientAudio:
        """
        Validates an upload and writes it to a new transient file.

        Args:
            filename: Client-supplied filename, used only for its extension.
            content_type: Declared MIME type.
            size: Declared size in bytes, if known.
            data: Readable stream of the file contents.

        Returns:
            TransientAudio owning the written file.

        Raises:
            InvalidUploadError: If validation fails or the stream exceeds the limit.
        """
        self.validate(filename, content_type, size)

        os.makedirs(self._upload_dir, exist_ok=True)
        extension = extension_for(filename, content_type)
        path = os.path.join(self._upload_dir, f"audio-{uuid.uuid4().hex}{extension}")

        written = 0
        try:
            with open(path, "xb") as out:
                while chunk := data.read(_CHUNK_SIZE):
                    written += len(chunk)
                    if written > self._max_size_bytes:
                        raise InvalidUploadError(
                            f"File exceeds maximum size of {self._max_size_bytes} bytes"
                        )
                    out.write(chunk)
        except BaseException:
            if os.path.exists(path):
                os.remove(path)
            raise

        audio = UploadedAudio(
            path=path,
            original_filename=filename,
            mime_type=content_type.lower(),
            size_bytes=written,
        )
        logger.info(
            "Transient audio stored",
            extra={
                "path": path,
                "original_filename": filename,
                "mime_type": audio.mime_type,
                "size": written,
            },
        )
        return TransientAudio(audio)
