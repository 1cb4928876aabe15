"""Storage contract expected by the content-management host."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from core.utils.filename import sanitize_filename

Middleware = Callable[[Any, Any, Callable[..., Any]], Any]


class StorageBase(ABC):
    """Operations every storage backend plugged into the host must provide.

    Failures are returned as error values rather than raised, which is the
    host's convention for storage backends.
    """

    @abstractmethod
    def exists(self, filename: str, target_dir: str | None = None) -> Any:
        """Return True/False for presence, or an error value."""

    @abstractmethod
    def save(self, image: Any, target_dir: str | None = None) -> Any:
        """Persist an upload and return its public URL, or an error value."""

    @abstractmethod
    def delete(self, filename: str, target_dir: str | None = None) -> Any:
        """Remove a stored file; None on success, or an error value."""

    @abstractmethod
    def serve(self) -> Middleware:
        """Return the middleware the host mounts to serve stored files."""

    @abstractmethod
    def read(self, options: dict[str, Any] | None = None) -> Any:
        """Return stored bytes."""

    def get_sanitized_file_name(self, file_name: str) -> str:
        return sanitize_filename(file_name)
