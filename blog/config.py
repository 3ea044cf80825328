# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
from typing import List, Mapping, Optional
from urllib.parse import urlsplit
from dotenv import load_dotenv
from .exceptions import ConfigError
from .images import RemoteImagePattern

# Load environment variables from .env file
load_dotenv()

DEFAULT_SITE_NAME = "My Headless Blog"

# Image origins the pages may render, as URL globs. "**" spans path segments.
DEFAULT_REMOTE_IMAGE_PATTERNS = [
    "http://localhost:8080/wp-content/uploads/**",
    "https://encrypted-tbn0.gstatic.com/images/**",
]


def _get_int(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer", {"value": raw})
    if value < minimum:
        raise ConfigError(f"{name} must be at least {minimum}", {"value": value})
    return value


class Config:
    """Startup-validated settings for the blog front end.

    Build it with `Config.from_env()`; a missing or malformed `WORDPRESS_API_URL`
    raises `ConfigError` before the app or the WordPress client are created.
    """
    wordpress_api_url: str
    site_name: str
    listing_revalidate_seconds: int
    slug_revalidate_seconds: int
    request_timeout_seconds: int
    home_recent_count: int
    articles_per_page: int
    remote_image_patterns: List[str]
    debug: bool
    debug_logging: bool

    def __init__(self,
                 wordpress_api_url: str,
                 site_name: str = DEFAULT_SITE_NAME,
                 listing_revalidate_seconds: int = 60,
                 slug_revalidate_seconds: int = 3600,
                 request_timeout_seconds: int = 10,
                 home_recent_count: int = 3,
                 articles_per_page: int = 20,
                 remote_image_patterns: Optional[List[str]] = None,
                 debug: bool = False,
                 debug_logging: bool = False):
        self.wordpress_api_url = self.validate_api_url(wordpress_api_url)
        self.site_name = site_name
        self.listing_revalidate_seconds = listing_revalidate_seconds
        self.slug_revalidate_seconds = slug_revalidate_seconds
        self.request_timeout_seconds = request_timeout_seconds
        self.home_recent_count = home_recent_count
        self.articles_per_page = articles_per_page
        if remote_image_patterns is None:
            remote_image_patterns = list(DEFAULT_REMOTE_IMAGE_PATTERNS)
        # Media served by the CMS itself is always allowed
        uploads = self.cms_origin + "/wp-content/uploads/**"
        if uploads not in remote_image_patterns:
            remote_image_patterns = remote_image_patterns + [uploads]
        for pattern in remote_image_patterns:
            try:
                RemoteImagePattern.parse(pattern)
            except ValueError as e:
                raise ConfigError(str(e), {"pattern": pattern})
        self.remote_image_patterns = remote_image_patterns
        self.debug = debug
        self.debug_logging = debug_logging

    @staticmethod
    def validate_api_url(url: Optional[str]) -> str:
        if url is None or not url.strip():
            raise ConfigError("WORDPRESS_API_URL environment variable is not defined")
        url = url.strip().rstrip("/")
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConfigError("WORDPRESS_API_URL must be an absolute http(s) URL", {"value": url})
        return url

    @property
    def cms_origin(self) -> str:
        parts = urlsplit(self.wordpress_api_url)
        return f"{parts.scheme}://{parts.netloc}"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Config":
        """Read and validate the configuration from the environment."""
        if env is None:
            env = os.environ

        patterns_raw = env.get("REMOTE_IMAGE_PATTERNS")
        patterns = None
        if patterns_raw:
            patterns = [p.strip() for p in patterns_raw.split(",") if p.strip()]

        return cls(
            wordpress_api_url=env.get("WORDPRESS_API_URL"),
            site_name=env.get("SITE_NAME", DEFAULT_SITE_NAME) or DEFAULT_SITE_NAME,
            listing_revalidate_seconds=_get_int(env, "LISTING_REVALIDATE_SECONDS", 60),
            slug_revalidate_seconds=_get_int(env, "SLUG_REVALIDATE_SECONDS", 3600),
            request_timeout_seconds=_get_int(env, "REQUEST_TIMEOUT_SECONDS", 10, minimum=1),
            home_recent_count=_get_int(env, "HOME_RECENT_COUNT", 3, minimum=1),
            articles_per_page=_get_int(env, "ARTICLES_PER_PAGE", 20, minimum=1),
            remote_image_patterns=patterns,
            debug=env.get("FLASK_DEBUG", "false").lower() in ("1", "true") or env.get("FLASK_ENV") == "development",
            debug_logging=env.get("DEBUG_LOGGING") is not None,
        )

    def __repr__(self):
        return f"<Config wordpress_api_url=\"{self.wordpress_api_url}\" site_name=\"{self.site_name}\" debug={self.debug}>"
