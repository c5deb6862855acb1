"""Abstract interface for audio object storage."""

from abc import ABC, abstractmethod


class AudioStorage(ABC):
    """Abstract base class for audio storage backends."""

    @abstractmethod
    def upload(
        self,
        object_name: str,
        data: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> None:
        """
        Uploads a file to storage.

        Args:
            object_name: The destination path/name in storage.
            data: The file contents.
            content_type: MIME type of the file.
            upsert: Overwrite an existing object at the same path.

        Raises:
            StorageUploadFailedError: If the upload fails.
        """

    @abstractmethod
    def get_public_url(self, object_name: str) -> str:
        """
        Resolves a publicly retrievable URL for a stored object.

        Args:
            object_name: The object path/name in storage.

        Returns:
            The public URL.

        Raises:
            StorageUploadFailedError: If no URL can be resolved.
        """
