"""Dataset loading."""

from .url_service import Result, UrlService

__all__ = ["Result", "UrlService"]
