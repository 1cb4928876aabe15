"""Abstract contract for the remote image store."""

from abc import ABC, abstractmethod
from typing import BinaryIO

from core.models.image import CloudflareImage


class RemoteImageStore(ABC):
    """Contract for addressing images held by a remote images API.

    Implementations translate the provider's wire conventions into three
    outcomes: not-found, success and failure.
    The upload service depends on this interface, not the implementation.
    """

    @abstractmethod
    def get_metadata(self, *, image_id: str) -> CloudflareImage | None:
        """Fetch image details by key.

        Args:
            image_id: Fully qualified image key

        Returns:
            Image details, or None if the store reports not-found

        Raises:
            ImageLookupFailedError: On any other failure
        """

    @abstractmethod
    def create_image(
        self,
        *,
        image_id: str,
        file: BinaryIO,
        filename: str,
    ) -> CloudflareImage:
        """Upload image bytes under an explicit id.

        Args:
            image_id: Fully qualified image key requested for the new image
            file: Open binary handle, streamed into the request
            filename: Filename sent with the file part

        Returns:
            Details of the created image, including the store-assigned id

        Raises:
            ImageUploadFailedError: On transport failure or when the store
                reports an unsuccessful upload
        """

    @abstractmethod
    def delete_image(self, *, image_id: str) -> None:
        """Delete image by key.

        Args:
            image_id: Fully qualified image key

        Raises:
            ImageDeletionFailedError: If deletion fails
        """
