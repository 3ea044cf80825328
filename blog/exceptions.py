# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
# 
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

from typing import Any, Dict, Optional


class BlogError(Exception):
    """Base exception for the blog front end."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UpstreamError(BlogError):
    """Network, status or parse failure while talking to the WordPress API."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.url = url
        details = dict(details or {})
        if status_code is not None:
            details["status_code"] = status_code
        if url is not None:
            details["url"] = url
        super().__init__(message, details)


class ConfigError(BlogError):
    """Required configuration is missing or invalid. Fatal at startup."""
    pass
