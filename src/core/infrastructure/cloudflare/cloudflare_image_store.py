"""Cloudflare Images-backed implementation of RemoteImageStore."""

from typing import BinaryIO

import requests
from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.images_api_adapter import (
    ImagesApiAdapter,
    ImagesApiAdapterProtocol,
)
from core.models.config import AdapterConfig
from core.models.errors import (
    ImageDeletionFailedError,
    ImageLookupFailedError,
    ImageUploadFailedError,
)
from core.models.image import CloudflareImage, CloudflareImageResponse
from core.repositories.image_store_repository import RemoteImageStore
from core.utils.constants import HTTP_STATUS_NOT_FOUND, LOGGER_SERVICE_NAME

logger = Logger(service=LOGGER_SERVICE_NAME, UTC=True)


def _http_status(response: requests.Response) -> str:
    return f"HTTP {response.status_code} {response.reason or ''}".rstrip()


def _parse_envelope(response: requests.Response) -> CloudflareImageResponse:
    """Parse the v4 envelope; raises ValueError on a malformed body."""
    try:
        return CloudflareImageResponse.model_validate(response.json())
    except (ValueError, PydanticValidationError) as exc:
        raise ValueError(f"Malformed Images API response: {_http_status(response)}") from exc


class CloudflareImageStore(RemoteImageStore):
    """Image store implementation backed by the Cloudflare Images API."""

    def __init__(
        self,
        config: AdapterConfig,
        adapter: ImagesApiAdapterProtocol | None = None,
    ) -> None:
        """Create the store using the provided API adapter."""
        self._config = config
        self._api = adapter or ImagesApiAdapter(config)

    def get_metadata(self, *, image_id: str) -> CloudflareImage | None:
        """Fetch image details, returning None when the image does not exist."""
        api_url = self._config.image_api_url(image_id)
        logger.debug("Checking image existence", extra={"image_id": image_id})

        try:
            response = self._api.get_image(image_id=image_id)
        except requests.RequestException as exc:
            logger.error("Image lookup request failed", extra={"image_id": image_id})
            raise ImageLookupFailedError(
                message=f"Cloudflare image exists check failed. Message: {exc}",
                details={"image_id": image_id, "api_url": api_url},
            ) from exc

        if response.status_code == HTTP_STATUS_NOT_FOUND:
            logger.info("Image not found", extra={"image_id": image_id})
            return None

        if not response.ok:
            logger.error(
                "Image lookup failed",
                extra={"image_id": image_id, "status_code": response.status_code},
            )
            raise ImageLookupFailedError(
                message=(
                    "Cloudflare image exists check failed. "
                    f"Message: {_http_status(response)}"
                ),
                details={
                    "image_id": image_id,
                    "api_url": api_url,
                    "status_code": response.status_code,
                },
            )

        try:
            envelope = _parse_envelope(response)
        except ValueError as exc:
            logger.error("Image lookup returned a malformed body", extra={"image_id": image_id})
            raise ImageLookupFailedError(
                message=f"Cloudflare image exists check failed. Message: {exc}",
                details={"image_id": image_id, "api_url": api_url},
            ) from exc

        if not envelope.success:
            logger.error(
                "Image lookup reported failure",
                extra={"image_id": image_id, "errors": envelope.error_summary()},
            )
            raise ImageLookupFailedError(
                message=(
                    "Cloudflare image exists check failed. "
                    f"Message: {envelope.error_summary()}"
                ),
                details={
                    "image_id": image_id,
                    "api_url": api_url,
                    "errors": [error.model_dump() for error in envelope.errors],
                },
            )

        logger.info("Image exists", extra={"image_id": image_id})
        return envelope.result or CloudflareImage(id=image_id)

    def create_image(
        self,
        *,
        image_id: str,
        file: BinaryIO,
        filename: str,
    ) -> CloudflareImage:
        """Upload image bytes and return the created image."""
        details = {"image_id": image_id, "api_url": self._config.images_api_url}
        logger.debug("Uploading image", extra={"image_id": image_id, "file_name": filename})

        try:
            response = self._api.upload_image(
                image_id=image_id,
                file=file,
                filename=filename,
            )
        except requests.RequestException as exc:
            logger.error("Image upload request failed", extra={"image_id": image_id})
            raise ImageUploadFailedError(
                message=f"Cloudflare image upload failed. Message: {exc}",
                details=details,
            ) from exc

        if not response.ok:
            logger.error(
                "Image upload rejected",
                extra={"image_id": image_id, "status_code": response.status_code},
            )
            raise ImageUploadFailedError(
                message=(
                    "Cloudflare image upload failed. "
                    f"Message: {_http_status(response)} {response.text}"
                ).rstrip(),
                details={**details, "status_code": response.status_code},
            )

        try:
            envelope = _parse_envelope(response)
        except ValueError as exc:
            logger.error("Image upload returned a malformed body", extra={"image_id": image_id})
            raise ImageUploadFailedError(
                message=f"Cloudflare image upload failed. Message: {exc}",
                details=details,
            ) from exc

        if not envelope.success:
            logger.error(
                "Image upload reported failure",
                extra={"image_id": image_id, "errors": envelope.error_summary()},
            )
            raise ImageUploadFailedError(
                message=(
                    "Cloudflare image upload failed. "
                    f"Message: {envelope.error_summary()}"
                ),
                details={
                    **details,
                    "errors": [error.model_dump() for error in envelope.errors],
                },
            )

        if envelope.result is None:
            logger.error("Image upload response has no result", extra={"image_id": image_id})
            raise ImageUploadFailedError(
                message="Cloudflare image upload failed. Message: response has no result",
                details=details,
            )

        logger.info(
            "Image uploaded successfully",
            extra={"image_id": image_id, "assigned_id": envelope.result.id},
        )
        return envelope.result

    def delete_image(self, *, image_id: str) -> None:
        """Delete an image from the store."""
        api_url = self._config.image_api_url(image_id)
        logger.debug("Deleting image", extra={"image_id": image_id})

        try:
            response = self._api.delete_image(image_id=image_id)
        except requests.RequestException as exc:
            logger.error("Image delete request failed", extra={"image_id": image_id})
            raise ImageDeletionFailedError(
                message=f"Cloudflare image delete failed. Message: {exc}",
                details={"image_id": image_id, "api_url": api_url},
            ) from exc

        if not response.ok:
            logger.error(
                "Image deletion failed",
                extra={"image_id": image_id, "status_code": response.status_code},
            )
            raise ImageDeletionFailedError(
                message=(
                    "Cloudflare image delete failed. "
                    f"Message: {_http_status(response)}"
                ),
                details={
                    "image_id": image_id,
                    "api_url": api_url,
                    "status_code": response.status_code,
                },
            )

        logger.info("Image deleted successfully", extra={"image_id": image_id})
