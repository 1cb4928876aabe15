"""
Pytest configuration and fixtures for storage adapter tests.
Provides adapter configuration, fake Images API responses and a recording
remote store double.
"""

import json
from collections.abc import Callable
from typing import Any, BinaryIO
from unittest.mock import MagicMock

import pytest
import requests

from core.models.config import AdapterConfig
from core.models.image import CloudflareImage
from core.repositories.image_store_repository import RemoteImageStore

CDN_BASE_URL = "https://imagedelivery.net/hash123"


@pytest.fixture
def adapter_options() -> dict[str, Any]:
    """Storage options as the host passes them."""
    return {
        "accountId": "acc_123",
        "authToken": "token-secret",
        "cdnBaseUrl": CDN_BASE_URL,
        "variant": "public",
        "idPrefix": "blog/",
        "overwrite": False,
    }


@pytest.fixture
def adapter_config(adapter_options) -> AdapterConfig:
    return AdapterConfig.model_validate(adapter_options)


@pytest.fixture
def overwrite_config(adapter_options) -> AdapterConfig:
    return AdapterConfig.model_validate({**adapter_options, "overwrite": True})


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """
    Helper to build a real requests.Response.

    Usage:
        response = make_response(200, {"success": True, "result": {...}})
    """

    def _make(
        status_code: int,
        body: Any = None,
        *,
        reason: str = "",
        raw_text: str | None = None,
    ) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        response.reason = reason
        if raw_text is not None:
            response._content = raw_text.encode("utf-8")
        elif body is not None:
            response._content = json.dumps(body).encode("utf-8")
        else:
            response._content = b""
        response.encoding = "utf-8"
        return response

    return _make


@pytest.fixture
def image_file(tmp_path) -> Callable[[str], str]:
    """
    Helper to write a local upload file.

    Usage:
        path = image_file("upload-1")
    """

    def _write(name: str = "upload-1", data: bytes = b"\x89PNG\r\n\x1a\nimage") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _write


class RecordingImageStore(RemoteImageStore):
    """Remote store double that records calls in order."""

    def __init__(
        self,
        *,
        existing: set[str] | None = None,
        get_exc: Exception | None = None,
        create_exc: Exception | None = None,
        delete_exc: Exception | None = None,
        assigned_id: str | None = None,
    ) -> None:
        self.existing = set(existing or ())
        self.calls: list[tuple[str, str]] = []
        self.uploaded: dict[str, bytes] = {}
        self.open_handles: list[BinaryIO] = []
        self._get_exc = get_exc
        self._create_exc = create_exc
        self._delete_exc = delete_exc
        self._assigned_id = assigned_id

    def get_metadata(self, *, image_id: str) -> CloudflareImage | None:
        self.calls.append(("get", image_id))
        if self._get_exc:
            raise self._get_exc
        if image_id in self.existing:
            return CloudflareImage(id=image_id)
        return None

    def create_image(
        self,
        *,
        image_id: str,
        file: BinaryIO,
        filename: str,
    ) -> CloudflareImage:
        self.calls.append(("create", image_id))
        self.open_handles.append(file)
        if self._create_exc:
            raise self._create_exc
        self.uploaded[image_id] = file.read()
        assigned = self._assigned_id or image_id
        self.existing.add(assigned)
        return CloudflareImage(id=assigned, filename=filename)

    def delete_image(self, *, image_id: str) -> None:
        self.calls.append(("delete", image_id))
        if self._delete_exc:
            raise self._delete_exc
        self.existing.discard(image_id)

    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]


@pytest.fixture
def recording_store() -> Callable[..., RecordingImageStore]:
    def _make(**kwargs: Any) -> RecordingImageStore:
        return RecordingImageStore(**kwargs)

    return _make


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()
