"""Thin adapter for interacting with the Cloudflare Images API."""

from typing import BinaryIO, Protocol

import requests

from core.models.config import AdapterConfig
from core.utils.constants import (
    ACCEPT_HEADER_VALUE,
    UPLOAD_FILE_FIELD,
    UPLOAD_ID_FIELD,
)


class ImagesApiAdapterProtocol(Protocol):
    """Minimal Images API adapter protocol (store-facing)."""

    def get_image(self, *, image_id: str) -> requests.Response: ...

    def upload_image(
        self,
        *,
        image_id: str,
        file: BinaryIO,
        filename: str,
    ) -> requests.Response: ...

    def delete_image(self, *, image_id: str) -> requests.Response: ...


class ImagesApiAdapter:
    """Low-level Images API calls (mechanical, no error handling).

    This adapter:
    - Wraps a requests session carrying the account's bearer token
    - Does NOT inspect status codes or bodies
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        config: AdapterConfig,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        """Create the adapter for the configured account.

        ``timeout`` is passed through to requests; None keeps the transport
        default of waiting indefinitely.
        """
        self._config = config
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": ACCEPT_HEADER_VALUE,
                "Authorization": f"Bearer {config.auth_token.get_secret_value()}",
            }
        )

    @property
    def base_url(self) -> str:
        return self._config.images_api_url

    def get_image(self, *, image_id: str) -> requests.Response:
        """Fetch image details.
        Raises requests exceptions - caught by domain implementation.
        """
        return self._session.get(
            self._config.image_api_url(image_id),
            timeout=self._timeout,
        )

    def upload_image(
        self,
        *,
        image_id: str,
        file: BinaryIO,
        filename: str,
    ) -> requests.Response:
        """Create an image from a multipart upload with an explicit id.
        Raises requests exceptions - caught by domain implementation.
        """
        return self._session.post(
            self.base_url,
            data={UPLOAD_ID_FIELD: image_id},
            files={UPLOAD_FILE_FIELD: (filename, file)},
            timeout=self._timeout,
        )

    def delete_image(self, *, image_id: str) -> requests.Response:
        """Delete an image.
        Raises requests exceptions - caught by domain implementation.
        """
        return self._session.delete(
            self._config.image_api_url(image_id),
            timeout=self._timeout,
        )
