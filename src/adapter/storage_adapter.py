"""
Storage adapter that keeps the host's images in Cloudflare Images.
"""

from collections.abc import Callable, Mapping
from typing import Any

import requests
from aws_lambda_powertools import Logger

from adapter.models import submission_path
from adapter.upload_service import ImageUploadService, Sanitizer
from core.infrastructure.adapters.images_api_adapter import ImagesApiAdapter
from core.infrastructure.cloudflare.cloudflare_image_store import CloudflareImageStore
from core.models.config import AdapterConfig
from core.models.errors import InternalServerError
from core.repositories.image_store_repository import RemoteImageStore
from core.repositories.storage_repository import Middleware, StorageBase
from core.utils.constants import LOGGER_SERVICE_NAME
from core.utils.decorators import returns_error_value
from core.utils.filename import sanitize_filename


def _exists_error_message(
    adapter: "CloudflareImagesStorageAdapter", filename: str, *_: Any, **__: Any
) -> str:
    api_url = adapter.config.image_api_url(adapter.service.build_image_id(filename))
    return f"Could not check if image exists: {filename}. API URL: {api_url}"


def _save_error_message(
    adapter: "CloudflareImagesStorageAdapter", image: Any, *_: Any, **__: Any
) -> str:
    return f"Cloudflare image upload failed. Path: {submission_path(image)}"


def _delete_error_message(
    adapter: "CloudflareImagesStorageAdapter", filename: str, *_: Any, **__: Any
) -> str:
    api_url = adapter.config.image_api_url(adapter.service.build_image_id(filename))
    return f"Could not delete image: {filename}. API URL: {api_url}"


class CloudflareImagesStorageAdapter(StorageBase):
    """Host storage backend delegating persistence to Cloudflare Images.

    Every operation returns its result or an `InternalServerError` value;
    none of them raise on remote failures.

    Example:
        adapter = CloudflareImagesStorageAdapter(
            {
                "accountId": "abc123",
                "authToken": "secret",
                "cdnBaseUrl": "https://imagedelivery.net/hash",
                "variant": "public",
                "idPrefix": "blog/",
                "overwrite": True,
            }
        )
        url = adapter.save({"path": "/tmp/upload-1", "name": "cat.jpg"})
    """

    def __init__(
        self,
        options: AdapterConfig | Mapping[str, Any],
        *,
        store: RemoteImageStore | None = None,
        sanitizer: Sanitizer = sanitize_filename,
        logger: Logger | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Build the adapter from host options.

        Raises:
            pydantic.ValidationError: If the options are invalid
        """
        self.config = (
            options
            if isinstance(options, AdapterConfig)
            else AdapterConfig.model_validate(dict(options))
        )
        self.logger = logger or Logger(service=LOGGER_SERVICE_NAME, UTC=True)
        self.store = store or CloudflareImageStore(
            self.config,
            ImagesApiAdapter(self.config, session=session),
        )
        self.service = ImageUploadService(
            config=self.config,
            store=self.store,
            sanitizer=sanitizer,
            logger=self.logger,
        )

    def get_sanitized_file_name(self, file_name: str) -> str:
        return self.service.sanitizer(file_name)

    @returns_error_value(_exists_error_message)
    def exists(self, filename: str, target_dir: str | None = None) -> bool:
        self.logger.info("exists:filename", extra={"file_name": filename})
        return self.service.probe_exists(self.service.build_image_id(filename))

    @returns_error_value(_save_error_message, include_cause=True)
    def save(self, image: Any, target_dir: str | None = None) -> str:
        submission = self.service.parse_submission(image)
        return self.service.save(submission)

    @returns_error_value(_delete_error_message)
    def delete(self, filename: str, target_dir: str | None = None) -> None:
        self.logger.info("delete:filename", extra={"file_name": filename})
        self.service.delete(self.service.build_image_id(filename))

    def serve(self) -> Middleware:
        """Images are delivered by the CDN; the host's serving stage passes through."""

        def middleware(req: Any, res: Any, next: Callable[..., Any]) -> Any:
            return next()

        return middleware

    def read(self, options: dict[str, Any] | None = None) -> None:
        # Images are resolved by URL, never read back through the adapter.
        return None


__all__ = ["CloudflareImagesStorageAdapter", "InternalServerError"]
