"""Cloudflare Images storage adapter package."""

__version__ = "1.0.0"
__description__ = (
    "Storage adapter that keeps a content-management host's images in Cloudflare Images"
)

__all__ = ["adapter", "core"]
