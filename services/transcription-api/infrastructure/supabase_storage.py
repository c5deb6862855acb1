"""Supabase Storage implementation of the AudioStorage interface."""

from supabase import Client
from transcription_common import StorageUploadFailedError, setup_logging
from transcription_common.infrastructure import AudioStorage

logger = setup_logging()


class SupabaseAudioStorage(AudioStorage):
    """Handles audio file storage operations using a Supabase bucket."""

    def __init__(self, client: Client, bucket_name: str):
        self._client = client
        self._bucket_name = bucket_name

    def upload(
        self,
        object_name: str,
        data: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> None:
        try:
            self._client.storage.from_(self._bucket_name).upload(
                path=object_name,
                file=data,
                file_options={
                    "content-type": content_type,
                    "upsert": str(upsert).lower(),
                },
            )
            logger.info(
                "File uploaded to Supabase Storage",
                extra={
                    "object_name": object_name,
                    "size": len(data),
                    "bucket": self._bucket_name,
                },
            )
        except Exception as e:
            logger.exception(
                "Supabase Storage upload failed",
                extra={"object_name": object_name},
            )
            raise StorageUploadFailedError(object_name, e) from e

    def get_public_url(self, object_name: str) -> str:
        try:
            url = self._client.storage.from_(self._bucket_name).get_public_url(
                object_name
            )
        except Exception as e:
            logger.exception(
                "Supabase public URL lookup failed",
                extra={"object_name": object_name},
            )
            raise StorageUploadFailedError(object_name, e) from e

        if not url:
            raise StorageUploadFailedError(
                object_name, ValueError("Storage returned an empty public URL")
            )
        return url
