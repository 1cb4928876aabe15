"""Business logic for the idempotent upload workflow.

This module decides, for a candidate filename, whether the remote store
already holds an equivalent image, whether to reuse or replace it, and
derives the public URL the host stores. Failures are raised as domain
errors; the host-facing adapter turns them into return values.
"""

from collections.abc import Callable

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from adapter.models import ImageSubmission
from core.models.config import AdapterConfig
from core.models.errors import ValidationError
from core.repositories.image_store_repository import RemoteImageStore
from core.utils.constants import LOGGER_SERVICE_NAME
from core.utils.filename import sanitize_filename

Sanitizer = Callable[[str], str]


class ImageUploadService:
    """Application service responsible for saving images remotely.

    This service orchestrates:
    - Stable key derivation from the submitted filename
    - Existence probing
    - Overwrite policy (delete-then-upload, or reuse)
    - Uploading image content to the remote store
    - Public URL derivation

    It holds no state beyond its read-only configuration, so concurrent
    calls for the same key are not coordinated here.
    """

    def __init__(
        self,
        *,
        config: AdapterConfig,
        store: RemoteImageStore,
        sanitizer: Sanitizer = sanitize_filename,
        logger: Logger | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.sanitizer = sanitizer
        self.logger = logger or Logger(service=LOGGER_SERVICE_NAME, UTC=True)

    def build_image_id(self, filename: str) -> str:
        """Prefix a (sanitized) filename into the remote image key."""
        return f"{self.config.id_prefix}{filename}"

    def build_public_url(self, object_id: str) -> str:
        return f"{self.config.cdn_base_url}/{self.config.variant}/{object_id}"

    def probe_exists(self, image_id: str) -> bool:
        """Return whether the remote store holds `image_id`.

        Not-found is a normal False. Any other failure propagates, so callers
        never guess existence from a failed probe.
        """
        exists = self.store.get_metadata(image_id=image_id) is not None
        self.logger.info(
            "exists:result",
            extra={"image_id": image_id, "exists": exists},
        )
        return exists

    def delete(self, image_id: str) -> None:
        self.logger.info("delete:id", extra={"image_id": image_id})
        self.store.delete_image(image_id=image_id)

    def save(self, submission: ImageSubmission) -> str:
        """Save an image and return its public URL.

        The save flow is:
        1. Sanitize the filename and derive the image key
        2. Probe the remote store for the key
        3. On collision, delete the old image (overwrite) or reuse it
        4. Upload the file under the key when no image remains
        5. Derive the public URL from the assigned id or the reused key

        A delete that succeeds before a failed upload is not rolled back.

        Args:
            submission: Local file to save

        Returns:
            Public CDN URL of the stored image

        Raises:
            ImageLookupFailedError: If the existence probe fails
            ImageDeletionFailedError: If the overwrite delete fails
            ImageUploadFailedError: If the upload fails or is rejected
            OSError: If the local file cannot be read
        """
        # Step 1: Derive the stable key
        file_name = self.sanitizer(submission.name)
        image_id = self.build_image_id(file_name)
        self.logger.info("save:id", extra={"image_id": image_id, "path": submission.path})

        # The handle is opened once and released on every exit path
        with open(submission.path, "rb") as file:
            # Step 2: Probe existence
            image_exists = self.probe_exists(image_id)
            self.logger.info(
                "save:imageAlreadyExists",
                extra={"image_id": image_id, "exists": image_exists},
            )

            # Step 3: Apply the overwrite policy
            if image_exists and self.config.overwrite:
                self.delete(image_id)
                image_exists = False

            if image_exists:
                image_url = self.build_public_url(image_id)
                self.logger.info(
                    "save:imageUrl (already existed, not overwritten)",
                    extra={"image_id": image_id, "image_url": image_url},
                )
                return image_url

            # Step 4: Upload under the explicit key
            created = self.store.create_image(
                image_id=image_id,
                file=file,
                filename=file_name,
            )

        # Step 5: Derive the URL from the store-assigned id
        image_url = self.build_public_url(created.id)
        self.logger.info(
            "save:imageUrl",
            extra={"image_id": image_id, "assigned_id": created.id, "image_url": image_url},
        )
        return image_url

    @staticmethod
    def parse_submission(image: object) -> ImageSubmission:
        """Validate a host upload object.

        Raises:
            ValidationError: If `path` or `name` is missing or empty
        """
        try:
            return ImageSubmission.from_host(image)
        except PydanticValidationError as exc:
            raise ValidationError(
                message="Invalid image submission",
                details={"errors": [err.get("msg") for err in exc.errors()]},
            ) from exc
